"""
CLI commands for inspecting the catalog: list, describe, check-contracts
"""

import json
import sys

from ..core.exceptions import ValidationError, WorkflowError
from ..core.models import TaskContext
from ..core.registry import default_registry


def cmd_list(args):
    """List all registered processes"""
    registry = default_registry()

    print(f"\n📋 Processes ({len(registry)}):")
    print("=" * 60)
    for definition in registry:
        print(f"\n{definition.process_id}")
        if definition.description:
            print(f"  {definition.description}")
        print(f"  Tasks: {len(definition.tasks)}")


def cmd_describe(args):
    """Show one catalog entry"""
    try:
        entry = default_registry().get(args.process_id).describe()
    except WorkflowError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(entry, indent=2, ensure_ascii=False, default=str))
        return

    print(f"\n📋 {entry['id']}")
    print("=" * 60)
    if entry["description"]:
        print(entry["description"])

    print("\nInputs:")
    for key, spec in entry["inputs"].items():
        if spec["required"]:
            print(f"  - {key} (required)")
        else:
            print(f"  - {key} = {json.dumps(spec['default'], default=str)}")

    print(f"\nTasks ({len(entry['tasks'])}):")
    for index, name in enumerate(entry["tasks"], 1):
        print(f"  {index}. {name}")


def cmd_check_contracts(args):
    """Build every registered task once and check its output contract"""
    registry = default_registry()
    checked = 0
    failures = []

    for definition in registry:
        for task in definition.tasks:
            checked += 1
            try:
                task.build({}, TaskContext(effect_id="contract-check", task_name=task.name))
            except ValidationError as e:
                failures.append((definition.process_id, task.name, e))

    for process_id, task_name, error in failures:
        print(f"❌ {process_id} / {task_name}: {error}")

    if failures:
        print(f"\n❌ {len(failures)} of {checked} contracts are invalid", file=sys.stderr)
        sys.exit(1)
    print(f"✅ All {checked} task contracts are valid")
