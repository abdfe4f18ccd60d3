"""Copy for the placeholder ("Coming Soon") pages."""

from dataclasses import dataclass

DEFAULT_DESCRIPTION = (
    "This feature is currently under development and will be available in the next phase."
)
STUB_TAG = "Sprint 1 - Stubbed Content"
DOMAIN_FALLBACK_NAME = "this domain"

# Lowercased title -> icon name
ICONS = {
    "workstreams": "workflow",
    "organogram": "folder-tree",
    "teams": "users",
    "procedures": "file-text",
    "tasks": "check-square",
    "dashboards": "bar-chart",
}
DEFAULT_ICON = "file-text"


@dataclass(frozen=True)
class EmptyState:
    title: str
    description: str = DEFAULT_DESCRIPTION
    icon: str = DEFAULT_ICON

    @property
    def heading(self) -> str:
        return f"{self.title} Coming Soon"

    @property
    def tag(self) -> str:
        return STUB_TAG


def empty_state(title: str, description: str | None = None, icon: str | None = None) -> EmptyState:
    """Build an empty state, picking the icon from the title when none is given."""
    return EmptyState(
        title=title,
        description=description or DEFAULT_DESCRIPTION,
        icon=icon or ICONS.get(title.lower(), DEFAULT_ICON),
    )


GLOBAL_PAGES = {
    "dashboards": empty_state(
        "Dashboards",
        "Access real-time analytics and insights for your domain. Monitor key "
        "performance indicators and make data-driven decisions.",
    ),
    "teams": empty_state(
        "Teams",
        "Create and manage teams within your domain. Collaborate with team members "
        "and track team performance.",
    ),
    "organogram": empty_state(
        "Organogram",
        "Visualize your organization's structure and hierarchy within the domain. "
        "View reporting lines and team relationships.",
    ),
    "workstreams": empty_state(
        "Workstreams",
        "Manage and track your domain-specific workflows and processes. This feature "
        "will enable streamlined collaboration across teams.",
    ),
}

# Page -> (title, description template with {name})
DOMAIN_PAGES = {
    "dashboards": (
        "Domain Dashboards",
        "Access real-time analytics and insights for {name}. Monitor task completion "
        "rates, member engagement, team performance metrics, and domain growth. "
        "Visualize KPIs through interactive charts and generate reports for "
        "data-driven decision making.",
    ),
    "teams": (
        "Domain Teams",
        "Create and manage teams within {name}. Organize members into functional "
        "teams, assign team leaders, and track team performance. Enable collaboration "
        "through team-specific workstreams and shared tasks.",
    ),
    "organogram": (
        "Domain Organogram",
        "Visualize the organizational structure and hierarchy within {name}. View "
        "reporting lines, team relationships, and role distributions. Track how "
        "members are organized across different departments and functions.",
    ),
    "workstreams": (
        "Domain Workstreams",
        "Manage and track workflows and processes for {name}. Group related tasks "
        "into workstreams and follow their progress across teams.",
    ),
}


def domain_page(page: str, domain_name: str | None) -> EmptyState:
    """
    Empty state for a domain page, interpolating the domain name.

    Raises:
        KeyError: If ``page`` is not a known domain page.
    """
    title, template = DOMAIN_PAGES[page]
    return empty_state(
        title,
        template.format(name=domain_name or DOMAIN_FALLBACK_NAME),
        icon=ICONS.get(page),
    )
