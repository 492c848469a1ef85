from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .config import InterpreterConfig, load_config
from .controls import to_control_instructions
from .files import load_request, write_json
from .interpreter import interpret_plan
from .validator import validate


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interpret a camera motion plan into keyframes")
    parser.add_argument("--request", required=True, help="JSON (or YAML) file with plan, scene, env and camera")
    parser.add_argument("--config", default=None, help="YAML file with interpreter settings")
    parser.add_argument("--output", default=None, help="Where to write the result JSON (stdout when omitted)")
    parser.add_argument(
        "--format",
        choices=("commands", "controls"),
        default="commands",
        help="Emit raw keyframes or setLookAt control instructions",
    )
    parser.add_argument("--strict", action="store_true", help="Exit non-zero when validation fails")
    parser.add_argument("--verbose", action="store_true", help="Log debug output")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = load_config(Path(args.config)) if args.config else InterpreterConfig()
    request_path = Path(args.request)

    print("[1/3] Loading request ->", request_path)
    request = load_request(request_path)

    print(f"[2/3] Interpreting motion plan ({len(request.plan.steps)} steps, {request.plan.requested_duration:.2f}s)")
    result = interpret_plan(request.plan, request.scene, request.env, request.camera, config=config)
    print(f"[2/3] {len(result.commands)} keyframes, {len(result.diagnostics)} diagnostics")

    print("[3/3] Validating path")
    validation = validate(
        result.commands,
        request.scene.bounds,
        vertical_adjustment=request.env.user_vertical_adjustment,
    )
    if validation.is_valid:
        print("[3/3] Path is clear of the subject bounds")
    else:
        print(f"[3/3] Validation failed at command {validation.violation_index}: {validation.errors[0]}")

    payload: Dict = {
        "commands": result.to_dict()["commands"],
        "diagnostics": [entry.to_dict() for entry in result.diagnostics],
        "validation": validation.to_dict(),
    }
    if args.format == "controls":
        payload["commands"] = to_control_instructions(result.commands)

    if args.output:
        write_json(Path(args.output), payload)
        print("Wrote", args.output)
    else:
        print(json.dumps(payload, indent=2))

    if args.strict and not validation.is_valid:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
