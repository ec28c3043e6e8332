"""
Helpers shared by the process catalog.
"""

from typing import Any, Dict, List, Optional

from ..core.run_context import RunContext


PROCESS_PREFIX = "product-management"


def process_id(slug: str) -> str:
    return f"{PROCESS_PREFIX}/{slug}"


async def review(ctx: RunContext, title: str, question: str, summary: Dict[str, Any],
                 files: Optional[List[Dict[str, Any]]] = None) -> None:
    """Breakpoint with the conventional context: run id, files so far, summary"""
    await ctx.breakpoint(
        question=question,
        title=title,
        context={
            "runId": ctx.run_id,
            "files": ctx.artifacts.as_files() if files is None else files,
            "summary": summary,
        },
    )


def document(path: Optional[str], label: str) -> Dict[str, Any]:
    """A single markdown file entry for a breakpoint"""
    return {"path": path, "format": "markdown", "label": label}


def finish(ctx: RunContext, slug: str, start_time: float, result: Dict[str, Any],
           **echo: Any) -> Dict[str, Any]:
    """Attach artifacts, duration and metadata to a successful result"""
    result["artifacts"] = ctx.artifacts.to_list()
    result["duration"] = ctx.now() - start_time
    result["metadata"] = {
        "processId": process_id(slug),
        "timestamp": start_time,
        **echo,
    }
    return result
