#!/usr/bin/env python3
import argparse
import sys

import requests

from polly_ssml.errors import MalformedTagError
from polly_ssml.ssml_parser import convert
from polly_ssml.well_formed import check_well_formed


def convert_remote(host: str, text: str, lang: str | None = None,
                   onlangfailure: str | None = None) -> dict:
    url = host.rstrip("/") + "/convert"
    payload = {"text": text, "lang": lang, "onlangfailure": onlangfailure}
    resp = requests.post(url, json=payload, timeout=30)
    if resp.status_code == 422:
        raise RuntimeError(resp.json().get("error", "Malformed tag"))
    resp.raise_for_status()
    return resp.json()


def convert_local(text: str, lang: str | None = None,
                  onlangfailure: str | None = None) -> dict:
    ssml = convert(text, lang=lang, onlangfailure=onlangfailure)
    problem = check_well_formed(ssml)
    return {"ssml": ssml, "well_formed": problem is None, "problem": problem}


def _read_input(args) -> str:
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            return f.read()
    if args.text is None or args.text == "-":
        return sys.stdin.read()
    return args.text


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Convert ${tag} annotated text to Amazon Polly SSML")
    ap.add_argument("text", nargs="?", help="Text to convert ('-' or omitted reads stdin)")
    ap.add_argument("--file", help="Read text from this file instead")
    ap.add_argument("--output", help="Write SSML to this file instead of stdout")
    ap.add_argument("--lang", default=None, help="xml:lang of the <speak> root (default en-US)")
    ap.add_argument("--onlangfailure", default=None,
                    help="onlangfailure of the <speak> root (default processorchoice)")
    ap.add_argument("--check", action="store_true",
                    help="Report to stderr whether the result is well-formed XML")
    ap.add_argument("--host", default=None,
                    help="Convert on a running server (e.g. http://localhost:7860) instead of locally")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        text = _read_input(args)
        if args.host:
            result = convert_remote(args.host, text, args.lang, args.onlangfailure)
        else:
            result = convert_local(text, args.lang, args.onlangfailure)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(0)
    except (MalformedTagError, RuntimeError, OSError, requests.RequestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result["ssml"])
    else:
        print(result["ssml"])

    if args.check:
        if result["well_formed"]:
            print("Well-formed: yes", file=sys.stderr)
        else:
            print(f"Well-formed: no ({result['problem']})", file=sys.stderr)


if __name__ == "__main__":
    main()
