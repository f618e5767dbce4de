"""Tracing module: logs solver steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.utils.config import TRACE_ENABLED
from src.utils.logging_utils import get_logger

logger = get_logger()


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'assign', 'domain_reduced', 'propagation_pass', 'branch', 'backtrack', ...
    attribute: Optional[str] = None
    house: Optional[int] = None
    domain_size: Optional[int] = None
    depth: Optional[int] = None  # Search depth the step happened at
    constraint: Optional[str] = None
    changes: Optional[int] = None
    reason: Optional[str] = None


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_assign(self, attribute: Any, house: int):
        """Log an attribute pinned to a house."""
        self._record('assign', attribute=str(attribute), house=house, domain_size=1)

    def log_domain_reduction(self, attribute: Any, house: int, new_domain_size: int):
        """Log a value removed from a house's candidate set."""
        self._record(
            'domain_reduced',
            attribute=str(attribute),
            house=house,
            domain_size=new_domain_size,
        )

    def log_propagation_pass(self, constraints_left: int, changes: int, depth: int = 0):
        """Log one full pass over the constraint list."""
        self._record(
            'propagation_pass',
            depth=depth,
            changes=changes,
            reason=f"{constraints_left} constraints left",
        )

    def log_branch(self, constraint: str, house: int, depth: int):
        """Log a search hypothesis."""
        self._record('branch', constraint=constraint, house=house, depth=depth)

    def log_backtrack(self, constraint: str, house: int, depth: int, reason: str = "Contradiction"):
        """Log an abandoned hypothesis."""
        self._record('backtrack', constraint=constraint, house=house, depth=depth, reason=reason)

    def log_contradiction(self, reason: str, attribute: Any = None, house: Optional[int] = None):
        """Log a detected contradiction."""
        self._record(
            'contradiction',
            attribute=str(attribute) if attribute is not None else None,
            house=house,
            reason=reason,
        )

    def log_solution_found(self, depth: int):
        """Log when a solution is found."""
        self._record('solution_found', depth=depth)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            logger.info("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'attribute', 'house',
            'domain_size', 'depth', 'constraint', 'changes', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        logger.info("Trace written to %s (%d steps)", filepath, len(self.steps))

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_assignments': action_counts.get('assign', 0),
            'num_branches': action_counts.get('branch', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=TRACE_ENABLED)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
