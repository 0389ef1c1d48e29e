"""Documentation generation pipeline.

Runs the stages strictly in order, each one triggered once and then waited on:

    references -> folders -> structure -> overview -> getting-started -> deploy

References are started by creating the document, so they are only waited on.
Deployment only happens when a subdomain is requested.
"""

import json
import logging
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any

from rich.console import Console

from polyfact.api_client import PolyfactClient
from polyfact.config import PolyfactConfig
from polyfact.docs import api, waiters
from polyfact.docs.folder_to_json import get_json_folder_representation
from polyfact.docs.models import DocsResult, Stage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusStage:
    """A status stage: what to print and which getter to poll."""

    stage: Stage
    label: str
    getter: api.GetFunction


STATUS_STAGES = (
    StatusStage(Stage.STRUCTURE, "structure", api.get_structure),
    StatusStage(Stage.OVERVIEW, "overview", api.get_overview),
    StatusStage(Stage.GETTING_STARTED, "getting started", api.get_getting_started),
)


class DocsGenerator:
    """Drive one documentation generation run."""

    def __init__(self, token: str, config: PolyfactConfig, console: Console | None = None):
        """Initialize generator.

        Args:
            token: Polyfact access token
            config: Resolved configuration (endpoint, timeouts, poll cadences)
            console: Console for status lines and progress bars
        """
        self.token = token
        self.config = config
        self.console = console or Console()
        self.client = PolyfactClient(
            token=token, endpoint=config.endpoint, timeout=config.request_timeout
        )

    def run(
        self,
        folder: str | Path,
        doc_id: str | None = None,
        name: str | None = None,
        subdomain: str | None = None,
        output: str | Path | None = None,
    ) -> DocsResult:
        """Generate documentation for ``folder``.

        Args:
            folder: Source folder
            doc_id: Existing document id; when given no new document is created
            name: Display name of the docs (defaults to the document id)
            subdomain: Deploy to this subdomain after generation
            output: Folder to write the stage results to

        Returns:
            DocsResult describing the run

        Raises:
            FolderConversionError: If the folder cannot be read
            PolyfactAPIError: If a trigger, create or deploy call fails
            PollTimeoutError: If a stage exceeds the wait budget
        """
        folder_json = get_json_folder_representation(folder)

        if not doc_id:
            doc_id = api.generate_references(folder_json, self.token, client=self.client)

        result = DocsResult(doc_id=doc_id, name=name or doc_id)

        self.console.print(f"Generating references for {doc_id}...")
        self._wait_progress(doc_id, Stage.REFERENCES)
        result.stages.append(Stage.REFERENCES)

        api.generate(doc_id, Stage.FOLDERS, self.token, client=self.client)
        self.console.print(f"Generating folder summaries for {doc_id}...")
        self._wait_progress(doc_id, Stage.FOLDERS)
        result.stages.append(Stage.FOLDERS)

        for status_stage in STATUS_STAGES:
            api.generate(doc_id, status_stage.stage, self.token, client=self.client)
            self.console.print(f"Generating {status_stage.label} for {doc_id}...")
            result.results[status_stage.stage] = waiters.wait_simple_generation(
                doc_id,
                partial(status_stage.getter, client=self.client),
                self.token,
                interval=self.config.status_poll_interval,
                timeout=self.config.poll_timeout,
                output=self.console,
                label=status_stage.stage.value,
            )
            result.stages.append(status_stage.stage)

        if subdomain:
            self.console.print("Deploying...")
            deployed = api.deploy(doc_id, result.name, subdomain, self.token, client=self.client)
            result.domain = deployed.domain
            self.console.print(
                f'Deployment started. The docs will be deployed to "{deployed.domain}"'
            )

        if output:
            write_results(result, Path(output))

        return result

    def _wait_progress(self, doc_id: str, kind: Stage) -> None:
        waiters.wait_progress(
            doc_id,
            kind,
            self.token,
            interval=self.config.progress_poll_interval,
            timeout=self.config.poll_timeout,
            output=self.console,
            client=self.client,
        )


def write_results(result: DocsResult, output_dir: Path) -> list[Path]:
    """Write the status-stage payloads and a summary to ``output_dir``.

    Returns:
        Paths of the files written
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []

    summary: dict[str, Any] = {
        "doc_id": result.doc_id,
        "name": result.name,
        "stages": [stage.value for stage in result.stages],
        "domain": result.domain,
    }
    files = {"doc.json": summary}
    for stage, stage_result in result.results.items():
        files[f"{stage.value}.json"] = stage_result.data

    for filename, payload in files.items():
        path = output_dir / filename
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        written.append(path)

    logger.debug(f"Wrote {len(written)} files to {output_dir}")
    return written
