"""
Reusable HTML snippets for the dashboard.
Return HTML strings for st.markdown(html, unsafe_allow_html=True).
"""


def dashboard_header(workspace: str = "Sample workspace", source: str = "Sample data") -> str:
    """Main dashboard header."""
    return f"""
    <div class="fhq-header">
        <h1>FounderHQ</h1>
        <div class="meta">
            <span>{workspace}</span>
            <span class="badge">{source}</span>
        </div>
    </div>
    """


def section_header(title: str, subtitle: str = None) -> str:
    """Section title with an optional caption."""
    sub_html = f'<div class="sub">{subtitle}</div>' if subtitle else ""
    return f"""
    <div class="fhq-section">
        <h2>{title}</h2>
        {sub_html}
    </div>
    """


def signal_banner(message: str, variant: str = "warning") -> str:
    """Health banner (warning or success)."""
    return f'<div class="fhq-banner {variant}">{message}</div>'


def empty_state(message: str) -> str:
    return f'<div class="fhq-empty">{message}</div>'


def footer(source: str = "Sample data") -> str:
    return f"""
    <div class="fhq-footer">
        FounderHQ metrics &middot; {source} &middot; refreshed every 5 min
    </div>
    """
