from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 1200)
    combo_bonus: int = 50
    lines_per_level: int = 5
    max_garbage: int = 4
    base_interval_ms: float = 500.0
    interval_step_ms: float = 10.0
    min_interval_ms: float = 20.0

    def score_for_lines(self, lines: int, level: int = 1, multiplier: float = 1.0, combo: int = 0) -> int:
        """Points for one lock clearing `lines` rows, including the combo bonus."""
        if lines <= 0:
            return 0
        base = self.line_clear_scores[min(lines, len(self.line_clear_scores)) - 1]
        points = base * level * multiplier + self.combo_bonus * combo * level * multiplier
        return int(round(points))

    def garbage_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return min(lines, self.max_garbage)

    def lines_for_level(self, level: int) -> int:
        return level * self.lines_per_level

    def gravity_interval(self, level: int, speed_multiplier: float = 1.0) -> float:
        interval = self.base_interval_ms - (level - 1) * speed_multiplier * self.interval_step_ms
        return max(self.min_interval_ms, interval)
