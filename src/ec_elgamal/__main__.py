"""Main entry point: python -m ec_elgamal"""

from __future__ import annotations

import argparse
import csv
import sys
import time

import numpy as np
from ecdsa.curves import curves as ecdsa_curves
from ecdsa.ellipticcurve import PointJacobi

from ec_elgamal import __version__
from ec_elgamal.elgamal import ElGamal
from ec_elgamal.errors import ElGamalError
from ec_elgamal.groups import SMALL_CURVES, get_group, small_group
from ec_elgamal.types import ElGamalConfig

DEFAULT_DOMAIN = 1 << 16


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ec-elgamal",
        description="Elliptic curve ElGamal with small-domain scalar messages",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command")

    # roundtrip
    rt = sub.add_parser("roundtrip", help="Generate keys, encrypt one message, decrypt it")
    rt.add_argument("--curve", type=str, default="p1021", help="Curve name (default p1021)")
    rt.add_argument("--message", type=int, required=True, help="Scalar message")
    rt.add_argument("--domain", type=int, default=DEFAULT_DOMAIN, help="Decryption search bound")
    rt.add_argument("--full-width", action="store_true", help="Sample k over the full scalar width")
    rt.add_argument("--seed", type=int, default=None, help="Random seed (toy curves only)")

    # bench
    bn = sub.add_parser("bench", help="Time keygen/encrypt/decrypt")
    bn.add_argument("--curve", type=str, default="p1021", help="Curve name (default p1021)")
    bn.add_argument("--rounds", type=int, default=20, help="Messages to encrypt and decrypt")
    bn.add_argument("--max-message", type=int, default=256, help="Messages drawn from [0, max)")
    bn.add_argument("--seed", type=int, default=None, help="Random seed")
    bn.add_argument("--csv", type=str, default=None, help="Export timings to this CSV path")

    # curves
    sub.add_parser("curves", help="List available curves")

    return parser


def run_roundtrip(args: argparse.Namespace) -> int:
    """keygen -> encrypt -> decrypt for a single message."""
    rng = np.random.default_rng(args.seed)
    group = get_group(args.curve, rng=rng)
    scheme = ElGamal(group, ElGamalConfig(ephemeral_full_width=args.full_width))

    print(f"Curve: {group.name}")
    print(f"Order: {group.get_order()} ({group.get_order().bit_length()} bits)")
    print(f"Generator: {group.get_generator()}")
    print()

    keys = scheme.keygen()
    ciphertext = scheme.encrypt(keys.public, args.message)

    print("=" * 50)
    print(" ROUNDTRIP")
    print("=" * 50)
    print(f"  Private key:  {keys.private}")
    print(f"  Public key:   {keys.public}")
    print(f"  M1:           {ciphertext.m1}")
    print(f"  M2:           {ciphertext.m2}")
    try:
        recovered = scheme.decrypt(keys.private, ciphertext, domain=args.domain)
    except ElGamalError as exc:
        print(f"  Decryption failed: {exc}")
        print("=" * 50)
        return 1
    print(f"  Message:      {args.message}")
    print(f"  Recovered:    {recovered}")
    print(f"  Match:        {recovered == args.message}")
    print("=" * 50)
    return 0 if recovered == args.message else 1


def run_bench(args: argparse.Namespace) -> int:
    """Mean wall time per operation over random small messages."""
    rng = np.random.default_rng(args.seed)
    group = get_group(args.curve, rng=rng)
    scheme = ElGamal(group)
    messages = rng.integers(0, args.max_message, size=args.rounds)

    t0 = time.perf_counter()
    keys = scheme.keygen()
    keygen_s = time.perf_counter() - t0

    encrypt_s = decrypt_s = 0.0
    failures = 0
    for m in messages:
        m = int(m)
        t0 = time.perf_counter()
        c = scheme.encrypt(keys.public, m)
        encrypt_s += time.perf_counter() - t0

        t0 = time.perf_counter()
        if scheme.decrypt(keys.private, c, domain=args.max_message) != m:
            failures += 1
        decrypt_s += time.perf_counter() - t0

    rounds = max(args.rounds, 1)
    results = {
        "curve": group.name,
        "rounds": args.rounds,
        "max_message": args.max_message,
        "keygen_ms": keygen_s * 1e3,
        "encrypt_ms_mean": encrypt_s * 1e3 / rounds,
        "decrypt_ms_mean": decrypt_s * 1e3 / rounds,
        "failures": failures,
    }

    print("=" * 50)
    print(" BENCHMARK")
    print("=" * 50)
    print(f"  Curve:               {group.name}")
    print(f"  Rounds:              {args.rounds}")
    print(f"  Message domain:      [0, {args.max_message})")
    print(f"  keygen:              {results['keygen_ms']:.3f} ms")
    print(f"  encrypt (mean):      {results['encrypt_ms_mean']:.3f} ms")
    print(f"  decrypt (mean):      {results['decrypt_ms_mean']:.3f} ms")
    print(f"  Failures:            {failures}")
    print("=" * 50)

    if args.csv:
        with open(args.csv, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["metric", "value"])
            for k, v in results.items():
                writer.writerow([k, v])
        print(f"Results exported to {args.csv}")

    return 0 if failures == 0 else 1


def run_curves(args: argparse.Namespace) -> int:
    print("Toy curves:")
    for name in SMALL_CURVES:
        group = small_group(name)
        print(f"  {name:<12} order {group.get_order()}")
    print("ecdsa curves:")
    for curve in ecdsa_curves:
        if not isinstance(curve.generator, PointJacobi):
            continue
        print(f"  {curve.name:<12} order {curve.order.bit_length()} bits")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "roundtrip":
        return run_roundtrip(args)
    elif args.command == "bench":
        return run_bench(args)
    elif args.command == "curves":
        return run_curves(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
