"""Background dispatch of ripgrep searches, one worker thread per query.

Every submission runs independently and reports through a single bounded
queue drained by the event loop. In-flight searches are never cancelled, so
a result for a superseded query may arrive after a newer one and replace it
on screen. Deliveries carry a sequence number so the consumer can choose to
drop stale ones instead.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Queue

from ..errors import PickerError, SearchFailed, ToolNotInstalled
from .match import MatchRecord
from .parser import DEFAULT_CONTEXT_LINES, parse_grouped_output

logger = logging.getLogger(__name__)

SEARCH_BINARY = "rg"
CHANNEL_CAPACITY = 100
# ripgrep exits with 1 when nothing matched.
_RG_NO_MATCHES = 1

SearchFunction = Callable[[str, Path, int], Sequence[MatchRecord]]


@dataclass(frozen=True)
class SearchDelivery:
    """Outcome of one submitted query: either results or an error."""

    sequence: int
    query: str
    results: tuple[MatchRecord, ...] | None = None
    error: PickerError | None = None


def build_search_command(query: str, context_lines: int, binary: str = SEARCH_BINARY) -> list[str]:
    """Return argv for a heading-grouped, line-numbered, smart-case search."""
    return [
        binary,
        "--color=never",
        "--heading",
        "--line-number",
        "--smart-case",
        "--no-context-separator",
        f"--context={context_lines}",
        "--",
        query,
    ]


def run_search(
    query: str,
    root: Path,
    context_lines: int = DEFAULT_CONTEXT_LINES,
    binary: str = SEARCH_BINARY,
) -> list[MatchRecord]:
    """Run ripgrep for ``query`` under ``root`` and parse its output.

    Raises ``ToolNotInstalled`` when the binary is missing, ``SearchFailed``
    for other launch or exit failures, and ``MalformedOutput`` for output the
    parser does not understand.
    """
    if shutil.which(binary) is None:
        raise ToolNotInstalled("ripgrep")
    cmd = build_search_command(query, context_lines, binary)
    logger.debug("running search: %s (cwd=%s)", shlex.join(cmd), root)
    try:
        proc = subprocess.run(
            cmd,
            cwd=root,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        # The binary exists, so this is a launch problem such as a vanished root.
        raise SearchFailed(f"Failed to run ripgrep: {exc}") from exc

    if proc.returncode not in (0, _RG_NO_MATCHES):
        stderr_text = " ".join(line.strip() for line in (proc.stderr or "").splitlines() if line.strip())
        if not proc.stdout:
            raise SearchFailed(stderr_text or f"ripgrep failed with exit code {proc.returncode}")
        # Partial output (e.g. unreadable files) still carries usable matches.
        logger.warning("ripgrep exited with %s: %s", proc.returncode, stderr_text)

    return parse_grouped_output(proc.stdout or "", context_lines)


class SearchDispatcher:
    """Spawn one uncoordinated background search per input change."""

    def __init__(
        self,
        root: Path,
        context_lines: int = DEFAULT_CONTEXT_LINES,
        *,
        search: SearchFunction = run_search,
        capacity: int = CHANNEL_CAPACITY,
    ) -> None:
        self.root = root
        self.context_lines = context_lines
        self._search = search
        self._lock = threading.Lock()
        self._next_sequence = 1
        self.deliveries: Queue[SearchDelivery] = Queue(maxsize=capacity)

    def _allocate_sequence(self) -> int:
        with self._lock:
            sequence = self._next_sequence
            self._next_sequence += 1
            return sequence

    def submit(self, query: str) -> SearchDelivery | None:
        """Start searching for ``query``.

        An empty query is answered synchronously with an empty result set and
        no subprocess; the returned delivery must be applied by the caller.
        Otherwise a worker thread is started and ``None`` is returned.
        """
        sequence = self._allocate_sequence()
        if not query:
            return SearchDelivery(sequence=sequence, query=query, results=())

        worker = threading.Thread(
            target=self._worker,
            args=(sequence, query),
            name=f"binocular-search-{sequence}",
            daemon=True,
        )
        worker.start()
        return None

    def _worker(self, sequence: int, query: str) -> None:
        try:
            results = tuple(self._search(query, self.root, self.context_lines))
        except PickerError as exc:
            logger.warning("search #%d for %r failed: %s", sequence, query, exc)
            delivery = SearchDelivery(sequence=sequence, query=query, error=exc)
        else:
            logger.debug("search #%d for %r found %d matches", sequence, query, len(results))
            delivery = SearchDelivery(sequence=sequence, query=query, results=results)
        # Blocks while the queue is full rather than dropping the delivery.
        self.deliveries.put(delivery)

    def poll(self) -> SearchDelivery | None:
        """Return the next completed delivery without blocking, if any."""
        try:
            return self.deliveries.get_nowait()
        except Empty:
            return None
