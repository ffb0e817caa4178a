"""Plain-text rendering of the clan rewards report"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from clan_rewards.models.activity import ActivityMode, Completion, RewardPeriod

EARNED_MARK = "✓"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


@dataclass
class RewardSection:
    """One reward category, its entries and the completions found for its window"""
    category_name: str
    window: RewardPeriod
    entries: List[Tuple[str, bool]] = field(default_factory=list)
    completions: Dict[ActivityMode, Optional[Completion]] = field(default_factory=dict)


def format_entry(name: str, earned: bool) -> str:
    mark = EARNED_MARK if earned else " "
    return f" {mark} {name}"


def format_completion(mode: ActivityMode, completion: Completion) -> str:
    timestamp = completion.end.strftime(TIMESTAMP_FORMAT).strip()
    return f"{mode.label} completed at {timestamp} by {completion.fireteam_as_string()}"


def format_section(section: RewardSection) -> List[str]:
    """Lines for a reward category, ending with a blank separator line"""
    lines = [section.category_name]
    lines.extend(format_entry(name, earned) for name, earned in section.entries)
    for mode in ActivityMode:
        completion = section.completions.get(mode)
        if completion is not None:
            lines.append(format_completion(mode, completion))
    lines.append("")
    return lines


def format_report(sections: List[RewardSection]) -> str:
    lines = []
    for section in sections:
        lines.extend(format_section(section))
    return "\n".join(lines)
