"""Collection of instruction and frame timings, saved as text files."""

from __future__ import annotations

from pathlib import Path


class TimingAnalyzer:
    """Records durations and writes them to a results file."""

    def __init__(self, file_name: str | Path) -> None:
        self.file_name = Path(file_name)
        self.operation_times: dict[int, int] = {}
        self.times: list[int] = []

    def log_cycle_time(self, opcode: int, dt: int) -> None:
        """Record the time of an opcode; the first time recorded is kept."""
        self.operation_times.setdefault(opcode & 0xFF, dt)

    def log_time(self, dt: int) -> None:
        self.times.append(dt)

    def save_cycle_times(self) -> None:
        """Write ``opcode,time`` lines to the results file."""
        lines = "".join(f"{opcode},{dt}\n" for opcode, dt in self.operation_times.items())
        self.file_name.write_text(lines)
        print(f"Saved timing analysis to: {self.file_name}")

    def save_times(self) -> None:
        """Write one recorded time per line to the results file."""
        self.file_name.write_text("".join(f"{dt}\n" for dt in self.times))
        print(f"Saved timing analysis to: {self.file_name}")