"""
fetch_raw.py
-------------
Downloads the UCS satellite database in one blocking GET and, if asked,
stores a dated snapshot with SHA256 integrity tracking.
"""

from __future__ import annotations

import datetime
import hashlib
import json
import logging
from pathlib import Path
from typing import Optional

import requests
from rich.console import Console

from orbitchart.config import PipelineConfig
from orbitchart.errors import FetchError, OutputError

console = Console(stderr=True)
log = logging.getLogger(__name__)

INDEX_NAME = "index.json"


def sha256sum(path: Path) -> str:
    # snapshots are a few MB, hash in one read
    return hashlib.sha256(Path(path).read_bytes()).hexdigest()


def fetch_database(config: PipelineConfig, session: Optional[requests.Session] = None) -> str:
    """Return the database document as text. No retries: any failure raises FetchError."""
    http = session or requests.Session()
    console.print(f"Fetching [cyan]{config.database_url}[/cyan] ...")
    try:
        with http.get(config.database_url, timeout=config.timeout) as resp:
            resp.raise_for_status()
            # 3xx not followed by requests (304, 300 without Location) is still a failure
            if resp.status_code != requests.codes.ok:
                raise FetchError(f"http request failed: {resp.status_code} {resp.reason}")
            data = resp.content
    except requests.RequestException as e:
        raise FetchError(f"http request failed: {e}") from e
    finally:
        if session is None:
            http.close()

    log.info("Downloaded %d bytes from %s", len(data), config.database_url)
    return data.decode(config.encoding, errors="replace")


def save_snapshot(text: str, snapshot_dir: Path, encoding: str = "utf-8") -> Path:
    snapshot_dir = Path(snapshot_dir)
    index_path = snapshot_dir / INDEX_NAME

    now = datetime.datetime.now(datetime.timezone.utc)
    fpath = snapshot_dir / f"ucs_database_{now:%Y%m%d_%H%M%S_%f}.txt"

    try:
        snapshot_dir.mkdir(parents=True, exist_ok=True)
        with open(fpath, "w", encoding=encoding, newline="") as f:
            f.write(text)

        sha = sha256sum(fpath)
        entry = {
            "file": str(fpath),
            "bytes": fpath.stat().st_size,
            "sha256": sha,
            "timestamp_utc": now.isoformat(timespec="seconds"),
        }

        # Append to index.json
        if index_path.exists():
            with open(index_path, "r", encoding="utf-8") as f:
                index = json.load(f)
        else:
            index = []

        index.append(entry)
        with open(index_path, "w", encoding="utf-8") as f:
            json.dump(index, f, indent=2)
    except OSError as e:
        raise OutputError(f"could not write snapshot to {snapshot_dir}: {e}") from e

    log.info("Snapshot saved: %s sha256=%s", fpath, sha)
    console.print(f"[green]Snapshot saved:[/green] {fpath.name} (sha256={sha[:12]}...)")
    return fpath
