# src/eigenpath/cli.py
from __future__ import annotations

import argparse
import json
import sys
from typing import Sequence

import numpy as np

from eigenpath.activation import list_activations
from eigenpath.config.loader import load_scene
from eigenpath.errors import EigenpathError
from eigenpath.linalg.modes import registry as mode_registry
from eigenpath.presets import PRESETS
from eigenpath.runtime.session import SceneSnapshot, Session

__all__ = ["main", "build_parser"]


def _fmt_vec(v) -> str:
    if v is None:
        return "n/a"
    return "(" + ", ".join(f"{float(c):.6g}" for c in v) + ")"


def _snapshot_to_dict(snap: SceneSnapshot) -> dict:
    def arr(a):
        return None if a is None else np.asarray(a).tolist()

    return {
        "t": snap.t,
        "status": int(snap.status),
        "error": snap.error,
        "matrix_at_t": arr(snap.matrix_at_t),
        "eigenvalues": None if snap.eigenvalues is None else [[e.re, e.im] for e in snap.eigenvalues],
        "eigenvalues_at_t": None if snap.eigenvalues_at_t is None else [[e.re, e.im] for e in snap.eigenvalues_at_t],
        "raw_transformed": arr(snap.raw_transformed),
        "transformed": arr(snap.transformed),
        "contact_counts": {str(k): v for k, v in snap.contact_counts.items()},
        "vectors": [
            {
                "id": str(e.id),
                "current": arr(e.current),
                "previous": arr(e.previous),
                "initial": arr(e.initial),
                "final": arr(e.final),
                "contacts": [
                    {
                        "wall_id": str(c.wall_id),
                        "axis": c.axis,
                        "position": c.position,
                        "point": arr(c.point),
                        "normal_direction": c.normal_direction,
                    }
                    for c in e.contacts
                ],
            }
            for e in snap.entries
        ],
    }


def _cmd_scene_validate(args) -> int:
    try:
        cfg = load_scene(args.path)
    except EigenpathError as e:
        print(str(e), file=sys.stderr)
        return 1
    print(f"Scene OK: {len(cfg.vectors)} vector(s), {len(cfg.walls)} wall(s), mode={cfg.interpolation}")
    return 0


def _cmd_scene_eval(args) -> int:
    try:
        cfg = load_scene(args.path)
    except EigenpathError as e:
        print(str(e), file=sys.stderr)
        return 1
    session = Session(cfg, jit=args.jit)
    t = cfg.start_t if args.t is None else args.t
    snap = session.snapshot(t)

    if args.json:
        print(json.dumps(_snapshot_to_dict(snap), indent=2))
    else:
        print(f"t = {snap.t:.6g}")
        if snap.matrix_at_t is not None:
            print("A(t) =")
            for row in snap.matrix_at_t:
                print("  " + "  ".join(f"{float(c):+.6f}" for c in row))
        for entry in snap.entries:
            print(f"vector {entry.id}: current={_fmt_vec(entry.current)} contacts={len(entry.contacts)}")
            for c in entry.contacts:
                print(f"  wall {c.wall_id} ({c.axis}={c.position:g}) at {_fmt_vec(c.point)} dir={c.normal_direction:+d}")
    if snap.error is not None:
        print(snap.error, file=sys.stderr)
    return 0 if snap.ok else 1


def _cmd_presets_list(args) -> int:
    for preset in PRESETS:
        rows = "; ".join(" ".join(f"{float(c):g}" for c in row) for row in preset.matrix)
        print(f"{preset.name}: [{rows}]")
    return 0


def _cmd_modes_list(args) -> int:
    seen = set()
    for mode in mode_registry().values():
        if mode.name in seen:
            continue
        seen.add(mode.name)
        aliases = f" (aliases: {', '.join(mode.aliases)})" if mode.aliases else ""
        print(f"{mode.name}{aliases}: {mode.description}")
    return 0


def _cmd_activations_list(args) -> int:
    for name in list_activations():
        print(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="eigenpath", description="Fractional matrix power trajectories")
    sub = parser.add_subparsers(dest="group", required=True)

    scene = sub.add_parser("scene", help="scene file commands")
    scene_sub = scene.add_subparsers(dest="command", required=True)
    p = scene_sub.add_parser("validate", help="check a scene TOML file")
    p.add_argument("path")
    p.set_defaults(func=_cmd_scene_validate)
    p = scene_sub.add_parser("eval", help="evaluate a scene at one time")
    p.add_argument("path")
    p.add_argument("--t", type=float, default=None, help="time to evaluate (default: sampling start)")
    p.add_argument("--json", action="store_true", help="print the snapshot as JSON")
    p.add_argument("--jit", action="store_true", help="use numba for the finite guard when available")
    p.set_defaults(func=_cmd_scene_eval)

    presets = sub.add_parser("presets", help="built-in matrices")
    presets_sub = presets.add_subparsers(dest="command", required=True)
    presets_sub.add_parser("list").set_defaults(func=_cmd_presets_list)

    modes = sub.add_parser("modes", help="eigenvalue interpolation modes")
    modes_sub = modes.add_subparsers(dest="command", required=True)
    modes_sub.add_parser("list").set_defaults(func=_cmd_modes_list)

    acts = sub.add_parser("activations", help="built-in activation functions")
    acts_sub = acts.add_subparsers(dest="command", required=True)
    acts_sub.add_parser("list").set_defaults(func=_cmd_activations_list)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
