# engine.py

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple


class Action:
    """
    The three outcomes of processing one page reference.

    HIT:         page already resident, memory contents unchanged
    FAULT:       page loaded into an empty frame
    REPLACEMENT: memory full, a victim page was evicted for the new one
    """
    HIT = "HIT"
    FAULT = "FAULT"
    REPLACEMENT = "REPLACEMENT"


class ReplacementPolicy:
    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "Optimal"
    CLOCK = "Clock"

    ALL = (FIFO, LRU, OPTIMAL, CLOCK)


@dataclass(frozen=True)
class StepRecord:
    """
    Snapshot of one simulation step, taken after the step's effect.

    Attributes:
        reference (int): Page referenced at this step
        ref_index (int): Position of the reference in the sequence
        action (str): One of Action.HIT / FAULT / REPLACEMENT
        frame_state (Tuple): Frame contents, None for an empty frame
        replaced_page (Optional[int]): Evicted page, REPLACEMENT only
        replaced_frame_index (Optional[int]): Frame loaded on FAULT/REPLACEMENT
        pointer (Optional[int]): Next victim slot (FIFO) or clock hand (Clock)
        lru_ages (Optional[Tuple]): Per-frame ages (LRU)
        ref_bits (Optional[Tuple]): Per-frame reference bits (Clock)
        probes (Optional[int]): Slots tested by the clock hand (Clock)
    """
    reference: int
    ref_index: int
    action: str
    frame_state: Tuple[Optional[int], ...]
    replaced_page: Optional[int] = None
    replaced_frame_index: Optional[int] = None
    pointer: Optional[int] = None
    lru_ages: Optional[Tuple[int, ...]] = None
    ref_bits: Optional[Tuple[int, ...]] = None
    probes: Optional[int] = None


@dataclass
class LRUState:
    """Per-frame age counters, 0 = most recently touched."""
    ages: List[int] = field(default_factory=list)

    def snapshot(self) -> Tuple[int, ...]:
        return tuple(self.ages)


@dataclass
class ClockState:
    """Reference bits plus the rotating hand."""
    ref_bits: List[int] = field(default_factory=list)
    hand: int = 0

    def snapshot(self) -> Tuple[int, ...]:
        return tuple(self.ref_bits)


# -----------------------------
# Helpers
# -----------------------------
def _check_frame_count(frame_count: int):
    if frame_count < 1:
        raise ValueError(f"frame_count must be >= 1, got {frame_count}")


def _find(memory: List[Optional[int]], page: Optional[int]) -> int:
    for i, slot in enumerate(memory):
        if slot == page:
            return i
    return -1


# -----------------------------
# Trace Generators
# -----------------------------
def generate_trace_fifo(references: Sequence[int], frame_count: int) -> List[StepRecord]:
    """
    First-In-First-Out: evict the frame under the pointer, then advance it.

    The pointer only moves on REPLACEMENT; loading into an empty frame
    leaves it where it is. The recorded pointer is the slot the *next*
    replacement would use.
    """
    _check_frame_count(frame_count)
    trace = []
    memory: List[Optional[int]] = [None] * frame_count
    next_victim = 0

    for i, ref in enumerate(references):
        replaced_page = None
        replaced_index = None

        if _find(memory, ref) != -1:
            action = Action.HIT
        else:
            free_index = _find(memory, None)
            if free_index != -1:
                memory[free_index] = ref
                action = Action.FAULT
                replaced_index = free_index
            else:
                action = Action.REPLACEMENT
                replaced_page = memory[next_victim]
                replaced_index = next_victim
                memory[next_victim] = ref
                next_victim = (next_victim + 1) % frame_count

        trace.append(StepRecord(
            reference=ref,
            ref_index=i,
            action=action,
            frame_state=tuple(memory),
            replaced_page=replaced_page,
            replaced_frame_index=replaced_index,
            pointer=next_victim,
        ))
    return trace


def generate_trace_lru(references: Sequence[int], frame_count: int) -> List[StepRecord]:
    """
    Least Recently Used, tracked with per-frame age counters.

    Every occupied frame except the referenced one ages by one before the
    step is resolved; the touched or newly loaded frame is reset to 0.
    The victim is the oldest frame, lowest index on ties.
    """
    _check_frame_count(frame_count)
    trace = []
    memory: List[Optional[int]] = [None] * frame_count
    state = LRUState(ages=[0] * frame_count)

    for i, ref in enumerate(references):
        replaced_page = None
        replaced_index = None
        hit_index = _find(memory, ref)

        for j in range(frame_count):
            if memory[j] is not None and j != hit_index:
                state.ages[j] += 1

        if hit_index != -1:
            action = Action.HIT
            state.ages[hit_index] = 0
        else:
            free_index = _find(memory, None)
            if free_index != -1:
                memory[free_index] = ref
                state.ages[free_index] = 0
                action = Action.FAULT
                replaced_index = free_index
            else:
                # max() keeps the first maximum, so ties go to the lowest slot
                victim = max(range(frame_count), key=lambda j: state.ages[j])
                action = Action.REPLACEMENT
                replaced_page = memory[victim]
                replaced_index = victim
                memory[victim] = ref
                state.ages[victim] = 0

        trace.append(StepRecord(
            reference=ref,
            ref_index=i,
            action=action,
            frame_state=tuple(memory),
            replaced_page=replaced_page,
            replaced_frame_index=replaced_index,
            lru_ages=state.snapshot(),
        ))
    return trace


def _next_use(references: Sequence[int], page: int, start: int) -> int:
    for k in range(start, len(references)):
        if references[k] == page:
            return k
    return -1


def generate_trace_optimal(references: Sequence[int], frame_count: int) -> List[StepRecord]:
    """
    Belady's optimal policy: evict the page whose next use is furthest away.

    A page that never recurs is taken immediately (first such frame in slot
    order). Otherwise the strictly furthest next use wins and ties keep the
    earlier frame.
    """
    _check_frame_count(frame_count)
    trace = []
    memory: List[Optional[int]] = [None] * frame_count

    for i, ref in enumerate(references):
        replaced_page = None
        replaced_index = None

        if _find(memory, ref) != -1:
            action = Action.HIT
        else:
            free_index = _find(memory, None)
            if free_index != -1:
                memory[free_index] = ref
                action = Action.FAULT
                replaced_index = free_index
            else:
                furthest = -1
                victim = -1
                for j in range(frame_count):
                    next_use = _next_use(references, memory[j], i + 1)
                    if next_use == -1:
                        victim = j
                        break
                    if next_use > furthest:
                        furthest = next_use
                        victim = j

                action = Action.REPLACEMENT
                replaced_page = memory[victim]
                replaced_index = victim
                memory[victim] = ref

        trace.append(StepRecord(
            reference=ref,
            ref_index=i,
            action=action,
            frame_state=tuple(memory),
            replaced_page=replaced_page,
            replaced_frame_index=replaced_index,
        ))
    return trace


def generate_trace_clock(references: Sequence[int], frame_count: int) -> List[StepRecord]:
    """
    Clock (second chance): the hand sweeps frames, clearing set reference
    bits, until it lands on a frame whose bit is already 0.

    Hits and loads into empty frames set the frame's bit and leave the
    hand alone. A sweep tests at most frame_count + 1 slots.
    """
    _check_frame_count(frame_count)
    trace = []
    memory: List[Optional[int]] = [None] * frame_count
    state = ClockState(ref_bits=[0] * frame_count)

    for i, ref in enumerate(references):
        replaced_page = None
        replaced_index = None
        probes = 0
        hit_index = _find(memory, ref)

        if hit_index != -1:
            action = Action.HIT
            state.ref_bits[hit_index] = 1
        else:
            free_index = _find(memory, None)
            if free_index != -1:
                memory[free_index] = ref
                state.ref_bits[free_index] = 1
                action = Action.FAULT
                replaced_index = free_index
            else:
                action = Action.REPLACEMENT
                while True:
                    probes += 1
                    if state.ref_bits[state.hand] == 0:
                        replaced_page = memory[state.hand]
                        replaced_index = state.hand
                        memory[state.hand] = ref
                        state.ref_bits[state.hand] = 1
                        state.hand = (state.hand + 1) % frame_count
                        break
                    # second chance
                    state.ref_bits[state.hand] = 0
                    state.hand = (state.hand + 1) % frame_count

        trace.append(StepRecord(
            reference=ref,
            ref_index=i,
            action=action,
            frame_state=tuple(memory),
            replaced_page=replaced_page,
            replaced_frame_index=replaced_index,
            pointer=state.hand,
            ref_bits=state.snapshot(),
            probes=probes,
        ))
    return trace


GENERATORS = {
    ReplacementPolicy.FIFO: generate_trace_fifo,
    ReplacementPolicy.LRU: generate_trace_lru,
    ReplacementPolicy.OPTIMAL: generate_trace_optimal,
    ReplacementPolicy.CLOCK: generate_trace_clock,
}


# -----------------------------
# Dispatcher
# -----------------------------
def generate_trace(policy: str, references: Sequence[int], frame_count: int) -> List[StepRecord]:
    """
    Run the generator for `policy` over the reference sequence.

    Raises:
        ValueError: If the policy is unknown or frame_count < 1
    """
    generator = GENERATORS.get(policy)
    if generator is None:
        raise ValueError(f"Unknown replacement policy: {policy}")
    return generator(references, frame_count)


# --------------------------------------
# Statistics
# --------------------------------------
def count_outcomes(trace: Sequence[StepRecord], upto: Optional[int] = None) -> Tuple[int, int]:
    """Return (hits, faults) over trace[0..upto]; REPLACEMENT counts as a fault."""
    if upto is None:
        upto = len(trace) - 1
    hits = 0
    faults = 0
    for record in trace[:upto + 1]:
        if record.action == Action.HIT:
            hits += 1
        else:
            faults += 1
    return hits, faults


def get_stats(trace: Sequence[StepRecord], step: int) -> Dict[str, float]:
    """
    Running statistics after replaying up to and including `step`.

    Args:
        trace: A complete simulation trace
        step: Cursor position, -1 when nothing has been replayed

    Returns:
        Dict[str, float]: hits, faults, total_refs, current_step and
        hit_ratio (a percentage)
    """
    if step < 0:
        hits, faults = 0, 0
    else:
        hits, faults = count_outcomes(trace, step)
    total_actions = hits + faults
    hit_ratio = (hits / total_actions) * 100 if total_actions > 0 else 0.0

    return {
        "hits": hits,
        "faults": faults,
        "total_refs": len(trace),
        "current_step": total_actions,
        "hit_ratio": hit_ratio,
    }


def running_stats(trace: Sequence[StepRecord]) -> List[Dict[str, float]]:
    return [get_stats(trace, step) for step in range(len(trace))]


# --------------------------------------
# Event log
# --------------------------------------
def describe_step(record: StepRecord) -> str:
    if record.action == Action.HIT:
        frame_no = record.frame_state.index(record.reference)
        return f"Hit: Page {record.reference} in Frame {frame_no}"
    if record.action == Action.FAULT:
        return f"Fault: Page {record.reference} loaded into Frame {record.replaced_frame_index}"
    return (f"Replace: Page {record.replaced_page} out, Page {record.reference} in "
            f"@ Frame {record.replaced_frame_index}")
