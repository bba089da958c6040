"""
Residence bookkeeping across consecutive frames.

The tracker compares the shell-member lists of two consecutive frames,
opens a record for every atom that entered and closes the record of every
atom that left. Closed records are kept in completion order.
"""
from dataclasses import dataclass, field
import logging
from typing import Dict, List, Sequence

logger = logging.getLogger(__name__)

@dataclass
class ResidenceRecord:
    atom_id: int = 0
    first_frame: int = 0
    last_frame: int = 0
    residence_time: float = 0.0

    def close(self, frame_index: int, frame_time: float) -> 'ResidenceRecord':
        self.last_frame = frame_index
        self.residence_time = (self.last_frame - self.first_frame) * frame_time
        return self

    @property
    def n_frames(self) -> int:
        return self.last_frame - self.first_frame

@dataclass
class FrameTransition:
    """What changed at one frame separator."""
    frame_index: int
    current: List[int]
    entering: List[int]
    leaving: List[int]
    closed: List[ResidenceRecord] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.entering or self.leaving)

def entering_atoms(previous: Sequence[int], current: Sequence[int]) -> List[int]:
    """
    Ids present in `current` but absent from `previous`.

    Order follows `current` and repeated ids are kept, so a duplicated id in
    `current` is reported twice.
    """
    previous_set = set(previous)
    return [atom_id for atom_id in current if atom_id not in previous_set]

def leaving_atoms(previous: Sequence[int], current: Sequence[int]) -> List[int]:
    """Ids present in `previous` but absent from `current`, in `previous` order."""
    current_set = set(current)
    return [atom_id for atom_id in previous if atom_id not in current_set]

class ResidenceTracker:
    """
    Keeps the open residence records and the list of completed ones.

    Args:
        frame_time: Time between two consecutive frames
    """

    def __init__(self, frame_time: float):
        if frame_time <= 0:
            raise ValueError("frame_time must be positive.")
        self.frame_time = frame_time
        self.open_records: Dict[int, ResidenceRecord] = {}
        self.completed: List[ResidenceRecord] = []

    def update(self, previous: Sequence[int], current: Sequence[int], frame_index: int) -> FrameTransition:
        """
        Process one frame boundary.

        Entering ids open a new record (replacing any open record for the same
        id); leaving ids close their record and move it to `completed`.

        Args:
            previous: Shell members of the previous frame
            current: Shell members of the frame just finished
            frame_index: 1-based index of the frame just finished

        Returns:
            FrameTransition describing this boundary
        """
        entering = entering_atoms(previous, current)
        leaving = leaving_atoms(previous, current)

        for atom_id in entering:
            self.open_records[atom_id] = ResidenceRecord(atom_id=atom_id, first_frame=frame_index)

        closed = []
        for atom_id in leaving:
            record = self.open_records.pop(atom_id, None)
            if record is None:
                logger.debug(f"Atom {atom_id} left the shell at frame {frame_index} without an open residence; "
                             f"recording a zero-valued placeholder.")
                record = ResidenceRecord()
            record.close(frame_index, self.frame_time)
            self.completed.append(record)
            closed.append(record)

        return FrameTransition(frame_index=frame_index, current=list(current),
                               entering=entering, leaving=leaving, closed=closed)

    def flush(self, frame_index: int) -> List[ResidenceRecord]:
        """
        Close every still-open record at `frame_index`, in the order they were opened.

        Records opened at `frame_index` itself have no duration and are
        dropped, so every completed record keeps last_frame > first_frame.

        Returns:
            The records closed by this call
        """
        flushed = [record.close(frame_index, self.frame_time) for record in self.open_records.values()
                   if record.first_frame < frame_index]
        n_skipped = len(self.open_records) - len(flushed)
        if n_skipped:
            logger.debug(f"{n_skipped} residence(s) opened at final frame {frame_index} were dropped.")
        self.completed.extend(flushed)
        self.open_records.clear()
        return flushed

    @property
    def n_open(self) -> int:
        return len(self.open_records)
