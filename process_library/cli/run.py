"""
CLI command for running a process: run
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict

from ..core.engine import WorkflowEngine
from .base import _collect_inputs, _load_config


def _print_summary(result: Dict[str, Any], engine: WorkflowEngine) -> None:
    record = engine.runs[-1]
    if result.get("success") is False:
        print(f"❌ Stopped at quality gate '{result.get('phase')}': {result.get('error')}")
        if result.get("recommendation"):
            print(f"   💡 {result['recommendation']}")
    else:
        print(f"✅ {record.process_id} completed (run {record.run_id})")
    print(f"   Tasks: {record.task_count}, breakpoints: {record.breakpoint_count}, "
          f"artifacts: {record.artifact_count}")


def _write_output(result: Dict[str, Any], output: str) -> None:
    target = Path(output)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(result, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
    print(f"📄 Result written to {target}")


def cmd_run(args):
    """Run one process to completion"""
    try:
        config = _load_config(
            args,
            executor=args.executor,
            runs_dir=args.runs_dir,
            auto_approve=True if args.auto_approve else None,
        )
        inputs = _collect_inputs(args.inputs, args.set)
        engine = WorkflowEngine(config=config)
        result = engine.run_sync(args.process_id, inputs)
    except Exception as e:
        print(f"❌ Run failed: {e}", file=sys.stderr)
        sys.exit(1)

    _print_summary(result, engine)
    if args.output:
        _write_output(result, args.output)

    if result.get("success") is False:
        sys.exit(1)
