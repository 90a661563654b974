from __future__ import annotations

from pooply.core.schemas.dashboard import (
    ActivityItem,
    DashboardStats,
    DashboardSummary,
    FrequencyPoint,
    PaletteColor,
    PaletteGroup,
)

# Sample data until logging is backed by storage
SAMPLE_STATS = {
    "total_logs": 42,
    "avg_bristol": 3.5,
    "streak_days": 5,
    "last_log": "2 hours ago",
}

SAMPLE_WEEKLY_FREQUENCY = [
    ("Mon", 2),
    ("Tue", 1),
    ("Wed", 3),
    ("Thu", 1),
    ("Fri", 4),
    ("Sat", 2),
    ("Sun", 1),
]

SAMPLE_RECENT_ACTIVITY = [
    {"id": 1, "type": "Bristol 3", "time": "2 hours ago", "duration": "5m"},
    {"id": 2, "type": "Bristol 4", "time": "Yesterday", "duration": "7m"},
    {"id": 3, "type": "Bristol 2", "time": "2 days ago", "duration": "4m"},
]

# (group title, [(name, css variable, hex), ...])
PALETTE = [
    ("Base Colors", [
        ("Background", "--background", "#F0EBE3"),
        ("Foreground", "--foreground", "#43312A"),
    ]),
    ("Primary", [
        ("Primary", "--primary", "#7D5A50"),
        ("Primary Foreground", "--primary-foreground", "#F0EBE3"),
    ]),
    ("Secondary", [
        ("Secondary", "--secondary", "#B4846C"),
        ("Secondary Foreground", "--secondary-foreground", "#43312A"),
    ]),
    ("Muted", [
        ("Muted", "--muted", "#A0937D"),
        ("Muted Foreground", "--muted-foreground", "#43312A"),
    ]),
    ("Accent", [
        ("Accent", "--accent", "#A0937D"),
        ("Accent Foreground", "--accent-foreground", "#43312A"),
    ]),
    ("Destructive", [
        ("Destructive", "--destructive", "#EF4444"),
        ("Destructive Foreground", "--destructive-foreground", "#F8FAFC"),
    ]),
    ("UI Elements", [
        ("Card", "--card", "#E4DCCF"),
        ("Card Foreground", "--card-foreground", "#43312A"),
        ("Popover", "--popover", "#E4DCCF"),
        ("Popover Foreground", "--popover-foreground", "#43312A"),
        ("Border", "--border", "#A0937D"),
        ("Input", "--input", "#A0937D"),
        ("Ring", "--ring", "#7D5A50"),
    ]),
]


def build_dashboard_summary() -> DashboardSummary:
    """Assemble the dashboard payload from the sample dataset."""
    return DashboardSummary(
        stats=DashboardStats(**SAMPLE_STATS),
        weekly_frequency=[FrequencyPoint(name=day, count=count) for day, count in SAMPLE_WEEKLY_FREQUENCY],
        recent_activity=[ActivityItem(**item) for item in SAMPLE_RECENT_ACTIVITY],
    )


def build_palette() -> list[PaletteGroup]:
    """Return the design-system colour tokens grouped the way the style guide shows them."""
    return [
        PaletteGroup(
            title=title,
            colors=[PaletteColor(name=name, variable=variable, hex=hex_value) for name, variable, hex_value in colors],
        )
        for title, colors in PALETTE
    ]
