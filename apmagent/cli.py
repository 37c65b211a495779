"""apmagent CLI: inspect configuration and decode browser transaction names."""

from __future__ import annotations

import argparse
import binascii
import json
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from .browser import deobfuscate, obfuscate
from .config import load_config


def _redacted_config() -> Dict[str, Any]:
    data = asdict(load_config())
    if data.get("license_key"):
        data["license_key"] = "<redacted>"
    return data


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="apmagent")
    sub = parser.add_subparsers(dest="cmd", required=True)

    obf_p = sub.add_parser("obfuscate", help="Obfuscate a transaction name as the browser header does")
    obf_p.add_argument("text")
    obf_p.add_argument("--key", default=None, help="Key to use (default: APMAGENT_LICENSE_KEY)")

    deobf_p = sub.add_parser("deobfuscate", help="Decode a transactionName taken from a browser header")
    deobf_p.add_argument("text")
    deobf_p.add_argument("--key", default=None, help="Key to use (default: APMAGENT_LICENSE_KEY)")

    sub.add_parser("config", help="Print the configuration resolved from the environment")

    args = parser.parse_args(argv)

    if args.cmd == "config":
        print(json.dumps(_redacted_config(), indent=2))
        return

    key = args.key if args.key is not None else load_config().license_key

    if args.cmd == "obfuscate":
        print(obfuscate(args.text, key))
        return

    if args.cmd == "deobfuscate":
        try:
            print(deobfuscate(args.text, key))
        except (binascii.Error, ValueError) as exc:
            raise SystemExit(f"cannot decode {args.text!r}: {exc}")
        return


if __name__ == "__main__":
    main()
