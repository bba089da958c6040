"""
Streaming trajectory parser.

Reads a text trajectory line by line, keeps the atoms of the frame being
read, collects the shell members of that frame and hands them to a
ResidenceTracker at every frame separator. Nothing but the current and the
previous frame is held in memory.
"""
import numpy as np
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union
from tqdm import tqdm

from ..core.atom import Atom
from ..core.residence import FrameTransition, ResidenceRecord, ResidenceTracker
from ..utils.config_manager import AnalysisConfig, DEFAULT_BOX_MARKER
from ..utils.helpers import safe_divide

logger = logging.getLogger(__name__)

class TrajectoryParseError(ValueError):
    """Raised for malformed atom records when strict parsing is enabled."""

class LineKind(Enum):
    ATOM = "atom"
    SEPARATOR = "separator"
    OTHER = "other"

def classify_line(line: str, box_marker: str = DEFAULT_BOX_MARKER) -> Tuple[LineKind, List[str]]:
    """
    Classify one trajectory line.

    An atom record has more than 5 whitespace-separated fields and does not
    contain the box-dimension marker. A frame separator has exactly one field.
    Everything else is skipped.

    Returns:
        (kind, fields)
    """
    fields = line.split()
    if len(fields) > 5 and box_marker not in line:
        return LineKind.ATOM, fields
    if len(fields) == 1:
        return LineKind.SEPARATOR, fields
    return LineKind.OTHER, fields

def _to_int(token: str, strict: bool) -> int:
    try:
        return int(token)
    except ValueError:
        if strict:
            raise TrajectoryParseError(f"Invalid integer field: {token!r}")
        return 0

def _to_float(token: str, strict: bool) -> float:
    try:
        return float(token)
    except ValueError:
        if strict:
            raise TrajectoryParseError(f"Invalid coordinate field: {token!r}")
        return 0.0

def parse_atom_fields(fields: List[str], strict: bool = False) -> Atom:
    """
    Build an Atom from `[id, element, x, y, z, type, ...]`.

    Unparseable numeric fields become zero unless `strict` is set.
    """
    return Atom(id=_to_int(fields[0], strict),
                element=fields[1],
                position=np.array([_to_float(f, strict) for f in fields[2:5]], dtype=np.float64),
                atom_type=fields[5])

@dataclass
class ParseResult:
    frame_count: int
    residences: List[ResidenceRecord]
    shell_member_total: int = 0
    n_open_at_eof: int = 0
    n_flushed: int = 0

    @property
    def mean_shell_members(self) -> float:
        return safe_divide(self.shell_member_total, self.frame_count)

class FrameStreamParser:
    """
    Single-pass parser driving a ResidenceTracker frame by frame.

    Args:
        config: Analysis settings (shell radius, center atom id, element, ...)
        tracker: Tracker to drive; a new one is built from config if omitted
        on_transition: Called with the FrameTransition of every frame separator
        on_flush: Called with the records closed at end of stream when
            `config.flush_open_on_eof` is set
    """

    def __init__(self, config: AnalysisConfig,
                 tracker: Optional[ResidenceTracker] = None,
                 on_transition: Optional[Callable[[FrameTransition], None]] = None,
                 on_flush: Optional[Callable[[List[ResidenceRecord]], None]] = None):
        self.config = config
        self.tracker = tracker if tracker is not None else ResidenceTracker(config.frame_time)
        self.on_transition = on_transition
        self.on_flush = on_flush

        self.frame_count = 0
        self.shell_member_total = 0
        # The center carries over between frames; it is only replaced when the center atom is read.
        self.structure_center = np.zeros(3, dtype=np.float64)
        self.frame_atoms: Dict[int, Atom] = {}
        self.previous_shell: List[int] = []
        self.current_shell: List[int] = []

    def process_atom(self, atom: Atom) -> None:
        if atom.id == self.config.center_atom_id:
            self.structure_center = atom.position.copy()
        elif atom.element == self.config.shell_element and atom.distance_to(self.structure_center) < self.config.shell_dist:
            self.current_shell.append(atom.id)
        self.frame_atoms[atom.id] = atom

    def end_frame(self) -> FrameTransition:
        self.frame_count += 1
        transition = self.tracker.update(self.previous_shell, self.current_shell, self.frame_count)
        if self.on_transition is not None:
            self.on_transition(transition)

        self.frame_atoms = {}
        self.shell_member_total += len(self.current_shell)
        self.previous_shell = self.current_shell
        self.current_shell = []
        return transition

    def feed(self, line: str) -> Optional[FrameTransition]:
        """
        Consume one line.

        Returns:
            The FrameTransition if the line closed a frame, else None
        """
        kind, fields = classify_line(line, self.config.box_marker)
        if kind is LineKind.ATOM:
            self.process_atom(parse_atom_fields(fields, self.config.strict_parsing))
        elif kind is LineKind.SEPARATOR:
            return self.end_frame()
        return None

    def finish(self) -> ParseResult:
        n_open = self.tracker.n_open
        flushed: List[ResidenceRecord] = []
        if self.config.flush_open_on_eof:
            flushed = self.tracker.flush(self.frame_count)
            if flushed and self.on_flush is not None:
                self.on_flush(flushed)
        elif n_open:
            logger.info(f"{n_open} residence(s) still open at end of trajectory were dropped.")

        result = ParseResult(frame_count=self.frame_count,
                             residences=list(self.tracker.completed),
                             shell_member_total=self.shell_member_total,
                             n_open_at_eof=n_open,
                             n_flushed=len(flushed))
        if self.frame_count == 0:
            logger.warning("No frame separators found; average shell occupancy not computed.")
        else:
            logger.info(f"Average Oxygens in First Shell = {result.mean_shell_members:e}")
        return result

    def parse_lines(self, lines: Iterable[str]) -> ParseResult:
        for line in tqdm(lines, desc="Reading trajectory", unit=" lines",
                         disable=not self.config.show_progress):
            self.feed(line)
        return self.finish()

    def parse_file(self, filename: Optional[Union[str, Path]] = None) -> ParseResult:
        """
        Stream a trajectory file through the parser.

        Args:
            filename: Trajectory path; defaults to `config.input_path`

        Raises:
            FileNotFoundError: If the trajectory file cannot be found
        """
        filepath = Path(filename if filename is not None else self.config.input_path)
        if not filepath.is_file():
            raise FileNotFoundError(f"Failed to open molecule file: {filepath}")
        logger.info(f"Reading trajectory: {filepath}")
        # Undecodable bytes become U+FFFD; such lines still classify by field count.
        with open(filepath, 'r', encoding='utf-8', errors='replace') as f:
            return self.parse_lines(f)
