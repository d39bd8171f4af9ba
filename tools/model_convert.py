# tools/model_convert.py

import argparse
from pathlib import Path

from simulator.machine import Machine
from simulator.model import load_model, normalize_format, save_model


def convert_model(src, dest=None, to_fmt=None, src_ext=None, validate=True):
    """
    Re-encode a model file. The target format comes from ``to_fmt`` or the
    suffix of ``dest``; ``dest`` defaults to ``src`` with the new suffix.
    """
    model = load_model(src, src_ext)
    if validate:
        Machine(model)

    if dest is None:
        fmt = normalize_format(to_fmt)
        dest = Path(src).with_suffix(f".{fmt}")
    else:
        fmt = normalize_format(to_fmt or Path(dest).suffix)

    if Path(dest).resolve() == Path(src).resolve():
        raise ValueError(f"Refusing to overwrite the source model {src}")
    return save_model(model, dest, fmt)


def main():
    parser = argparse.ArgumentParser(description="Convert Turing machine models between JSON, TOML and YAML")
    parser.add_argument("src", help="Source model file")
    parser.add_argument("dest", nargs="?", help="Destination file (default: source with new suffix)")
    parser.add_argument("--to", dest="to_fmt", help="Target format (json, toml, yaml)")
    parser.add_argument("--ext", help="Source format; inferred from the suffix when omitted")
    parser.add_argument("--no-validate", action="store_true", help="Skip building the machine before writing")
    args = parser.parse_args()

    if args.dest is None and args.to_fmt is None:
        raise ValueError("You must specify either a destination file or --to.")

    path = convert_model(args.src, args.dest, args.to_fmt, args.ext, validate=not args.no_validate)
    print(f"[INFO] Model written to {path}")


if __name__ == "__main__":
    main()
