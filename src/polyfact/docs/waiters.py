"""Wait for documentation stages to complete.

Two kinds of stages exist:
- fractional stages (references, folders) expose total/progress counters
- status stages (structure, overview, getting-started) flip to "ok" once done

Both waiters sleep for one interval, fetch, render the result on a rich
progress bar and stop at the first completed fetch. A failed fetch counts as
"not complete yet" and is retried on the next tick. Each waiter gives up with
PollTimeoutError once the wait budget is spent.
"""

import logging
import time

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from polyfact.api_client import PolyfactClient
from polyfact.docs.api import GetFunction, get_progress
from polyfact.docs.errors import PollTimeoutError
from polyfact.docs.models import PROGRESS_STAGES, GetResult, ProgressSnapshot, Stage
from polyfact.log_sanitizer import LogSanitizer

logger = logging.getLogger(__name__)
console = Console()

DEFAULT_PROGRESS_INTERVAL = 0.3
DEFAULT_STATUS_INTERVAL = 1.0
DEFAULT_POLL_TIMEOUT = 1800.0


def _progress_bar(output: Console | None) -> Progress:
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=output or console,
    )


def _check_budget(start: float, timeout: float, doc_id: str, stage: str) -> None:
    elapsed = time.monotonic() - start
    if elapsed >= timeout:
        raise PollTimeoutError(
            f"Timed out after {elapsed:.0f}s waiting for {stage} generation of {doc_id}",
            doc_id=doc_id,
            stage=stage,
            elapsed=elapsed,
        )


def fetch_progress(
    doc_id: str, kind: Stage, token: str, client: PolyfactClient | None = None
) -> ProgressSnapshot:
    """Fetch a progress snapshot, substituting the waiting snapshot on failure."""
    try:
        snapshot = get_progress(doc_id, kind, token, client=client)
        if isinstance(snapshot, dict):
            snapshot = ProgressSnapshot.from_dict(snapshot)
        return snapshot
    except Exception as e:
        logger.debug(
            LogSanitizer.create_safe_error_message(
                e, f"Progress poll for {kind.value} failed", secrets=(token,)
            )
        )
        return ProgressSnapshot.waiting()


def wait_progress(
    doc_id: str,
    kind: Stage,
    token: str,
    interval: float = DEFAULT_PROGRESS_INTERVAL,
    timeout: float = DEFAULT_POLL_TIMEOUT,
    output: Console | None = None,
    client: PolyfactClient | None = None,
) -> ProgressSnapshot:
    """Poll a fractional stage until ``progress >= total``.

    Args:
        doc_id: Document id
        kind: Stage.REFERENCES or Stage.FOLDERS
        token: Polyfact access token
        interval: Seconds between polls
        timeout: Wait budget in seconds; a non-positive budget polls once
        output: Console to render the progress bar on
        client: API client (default: built from the global configuration)

    Returns:
        The snapshot that satisfied the completion condition

    Raises:
        PollTimeoutError: If the stage is not complete within ``timeout``
        ValueError: If ``kind`` does not report progress counters
    """
    kind = Stage(kind)
    if kind not in PROGRESS_STAGES:
        raise ValueError(f"{kind.value} does not report progress counters")
    start = time.monotonic()

    with _progress_bar(output) as progress:
        task = progress.add_task(kind.value, total=None)

        while True:
            time.sleep(interval)
            snapshot = fetch_progress(doc_id, kind, token, client)

            progress.update(
                task, total=max(snapshot.total, 0), completed=max(snapshot.progress, 0)
            )

            if snapshot.is_complete:
                logger.debug(f"{kind.value} complete for {doc_id}: {snapshot}")
                return snapshot

            _check_budget(start, timeout, doc_id, kind.value)


def wait_simple_generation(
    doc_id: str,
    get_function: GetFunction,
    token: str,
    interval: float = DEFAULT_STATUS_INTERVAL,
    timeout: float = DEFAULT_POLL_TIMEOUT,
    output: Console | None = None,
    label: str = "generation",
) -> GetResult:
    """Poll a status stage until its getter reports ``status == "ok"``.

    Args:
        doc_id: Document id
        get_function: Getter called as ``get_function(doc_id, token)``
        token: Polyfact access token
        interval: Seconds between polls
        timeout: Wait budget in seconds; a non-positive budget polls once
        output: Console to render the progress bar on
        label: Progress bar description

    Returns:
        The getter result that reported "ok"

    Raises:
        PollTimeoutError: If the stage is not complete within ``timeout``
    """
    start = time.monotonic()

    with _progress_bar(output) as progress:
        task = progress.add_task(label, total=1, completed=0)

        while True:
            time.sleep(interval)
            try:
                result = get_function(doc_id, token)
                if isinstance(result, dict):
                    result = GetResult.from_dict(result)
            except Exception as e:
                logger.debug(
                    LogSanitizer.create_safe_error_message(
                        e, f"Status poll for {label} failed", secrets=(token,)
                    )
                )
                result = GetResult(status=None)

            if result.is_complete:
                progress.update(task, completed=1)
                return result

            _check_budget(start, timeout, doc_id, label)
