"""
Question layout for a single part.

Positions are 0-based and always the contiguous range ``0..n-1``. A prompt
group covers a contiguous run of positions; its range is derived from its
members, never stored. Every operation returns a new layout and leaves
``self`` untouched, so a rejected call has no effect.

Group membership rules:

* inserting strictly inside a group's range (``start < p <= end``) joins it;
  inserting at either edge does not,
* removing a member shrinks its group; an empty group disappears,
* a moved question stays in its group when it lands within or next to the
  remaining members, otherwise it leaves and the insert rule applies.
"""
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from exam_builder.core.errors import InvalidRange, NotFound, OutOfRange, OverlappingGroup


@dataclass(frozen=True)
class Slot:
    question_id: str
    group_id: Optional[str] = None


class QuestionLayout:
    def __init__(self, slots: Sequence[Slot] = (), prompts: Optional[Dict[str, str]] = None):
        self.slots: Tuple[Slot, ...] = tuple(slots)
        self.prompts: Dict[str, str] = dict(prompts or {})

    def __len__(self):
        return len(self.slots)

    def __eq__(self, other):
        if not isinstance(other, QuestionLayout):
            return NotImplemented
        return self.slots == other.slots and self.prompts == other.prompts

    def __repr__(self):
        return f"QuestionLayout({list(self.slots)!r}, {self.prompts!r})"

    @property
    def ids(self) -> List[str]:
        return [slot.question_id for slot in self.slots]

    def positions(self) -> Dict[str, int]:
        return {slot.question_id: index for index, slot in enumerate(self.slots)}

    def index_of(self, question_id: str) -> int:
        for index, slot in enumerate(self.slots):
            if slot.question_id == question_id:
                return index
        raise NotFound(f"Question {question_id} is not in this part", id=question_id)

    def group_ranges(self) -> Dict[str, Tuple[int, int]]:
        return _ranges(self.slots)

    # ---------------------------
    # Operations
    # ---------------------------

    def insert(self, question_id: str, position: Optional[int] = None) -> "QuestionLayout":
        if position is None:
            position = len(self.slots)
        if position < 0 or position > len(self.slots):
            raise OutOfRange(
                f"Position {position} is outside 0..{len(self.slots)}",
                position=position,
                length=len(self.slots),
            )
        slot = Slot(question_id, _enclosing_group(self.slots, position))
        return self._with(self.slots[:position] + (slot,) + self.slots[position:])

    def remove(self, question_id: str) -> "QuestionLayout":
        index = self.index_of(question_id)
        return self._with(self.slots[:index] + self.slots[index + 1:])

    def move(self, question_id: str, new_position: int) -> "QuestionLayout":
        if new_position < 0 or new_position >= len(self.slots):
            raise OutOfRange(
                f"Position {new_position} is outside 0..{len(self.slots) - 1}",
                position=new_position,
                length=len(self.slots),
            )
        index = self.index_of(question_id)
        moving = self.slots[index]
        rest = self.slots[:index] + self.slots[index + 1:]
        enclosing = _enclosing_group(rest, new_position)

        group_id = moving.group_id
        if group_id is not None:
            own = _ranges(rest).get(group_id)
            if own is None:
                # Sole member: the group travels with the question
                if enclosing is not None:
                    raise OverlappingGroup(
                        f"Question {question_id} carries its own group into group {enclosing}",
                        group_id=enclosing,
                    )
            elif not own[0] <= new_position <= own[1] + 1:
                group_id = enclosing
        else:
            group_id = enclosing

        slot = replace(moving, group_id=group_id)
        return self._with(rest[:new_position] + (slot,) + rest[new_position:])

    def group_range(self, start: int, end: int, group_id: str, prompt: str) -> "QuestionLayout":
        if start > end or start < 0 or end >= len(self.slots):
            raise InvalidRange(
                f"Range {start}..{end} is not within 0..{len(self.slots) - 1}",
                start=start,
                end=end,
                length=len(self.slots),
            )
        for slot in self.slots[start:end + 1]:
            if slot.group_id is not None:
                existing = self.group_ranges()[slot.group_id]
                raise OverlappingGroup(
                    f"Range {start}..{end} overlaps group {slot.group_id} at {existing[0]}..{existing[1]}",
                    group_id=slot.group_id,
                    start=existing[0],
                    end=existing[1],
                )
        slots = tuple(
            replace(slot, group_id=group_id) if start <= index <= end else slot
            for index, slot in enumerate(self.slots)
        )
        prompts = dict(self.prompts)
        prompts[group_id] = prompt
        return QuestionLayout(slots, prompts)

    def ungroup(self, group_id: str) -> "QuestionLayout":
        if group_id not in self.prompts:
            raise NotFound(f"Group {group_id} is not in this part", id=group_id)
        return self._with(tuple(
            replace(slot, group_id=None) if slot.group_id == group_id else slot
            for slot in self.slots
        ))

    def _with(self, slots: Tuple[Slot, ...]) -> "QuestionLayout":
        live = {slot.group_id for slot in slots if slot.group_id is not None}
        return QuestionLayout(slots, {k: v for k, v in self.prompts.items() if k in live})


def _ranges(slots: Sequence[Slot]) -> Dict[str, Tuple[int, int]]:
    ranges: Dict[str, Tuple[int, int]] = {}
    for index, slot in enumerate(slots):
        if slot.group_id is None:
            continue
        start, _ = ranges.get(slot.group_id, (index, index))
        ranges[slot.group_id] = (start, index)
    return ranges


def _enclosing_group(slots: Sequence[Slot], position: int) -> Optional[str]:
    """Group an insertion at ``position`` would land strictly inside."""
    for group_id, (start, end) in _ranges(slots).items():
        if start < position <= end:
            return group_id
    return None
