"""
FounderHQ theme: black borders, offset shadows, monospace figures.
Color tokens, custom CSS and the Plotly template.
"""

# ─── Color Tokens ───

COLORS = {
    "ink": "#000000",
    "paper": "#ffffff",
    "muted": "#6b7280",
    "grid": "#e5e7eb",
    "primary": "#3b82f6",
    "success": "#10b981",
    "danger": "#ef4444",
    "warning": "#f59e0b",
    "violet": "#8b5cf6",
}

CHART_COLORS = [
    "#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6",
    "#ec4899", "#14b8a6", "#f97316", "#06b6d4", "#84cc16",
]


# ─── Plotly Template ───

PLOTLY_TEMPLATE = {
    "layout": {
        "paper_bgcolor": COLORS["paper"],
        "plot_bgcolor": COLORS["paper"],
        "font": {"family": "IBM Plex Mono, monospace", "color": COLORS["ink"], "size": 12},
        "xaxis": {"gridcolor": COLORS["grid"], "linecolor": COLORS["ink"]},
        "yaxis": {"gridcolor": COLORS["grid"], "linecolor": COLORS["ink"], "tickprefix": "$"},
        "legend": {"orientation": "h", "yanchor": "bottom", "y": 1.02, "x": 0},
        "colorway": CHART_COLORS,
        "margin": {"l": 10, "r": 10, "t": 30, "b": 10},
    }
}


# ─── Custom CSS ───

CUSTOM_CSS = """
<style>
[data-testid="stMetric"] {
    background: """ + COLORS["paper"] + """;
    border: 2px solid """ + COLORS["ink"] + """;
    box-shadow: 4px 4px 0 """ + COLORS["ink"] + """;
    padding: 16px;
}
[data-testid="stMetricValue"] {
    font-family: 'IBM Plex Mono', monospace !important;
    font-weight: 600 !important;
}
.fhq-header h1 { font-size: 1.8rem; margin-bottom: 0; }
.fhq-header .meta { font-family: monospace; color: """ + COLORS["muted"] + """; display: flex; gap: 8px; }
.fhq-header .badge { border: 2px solid """ + COLORS["ink"] + """; padding: 0 6px; }
.fhq-section { border-bottom: 2px solid """ + COLORS["ink"] + """; margin: 24px 0 12px; }
.fhq-section h2 { font-size: 1.2rem; margin: 0; }
.fhq-section .sub { font-family: monospace; color: """ + COLORS["muted"] + """; font-size: 0.8rem; }
.fhq-banner { border: 2px solid """ + COLORS["ink"] + """; padding: 8px 12px; margin: 6px 0; font-family: monospace; }
.fhq-banner.warning { background: #fef3c7; }
.fhq-banner.success { background: #d1fae5; }
.fhq-empty { border: 2px dashed """ + COLORS["muted"] + """; padding: 24px; text-align: center; color: """ + COLORS["muted"] + """; }
.fhq-footer { text-align: center; font-family: monospace; color: """ + COLORS["muted"] + """; margin-top: 32px; font-size: 0.75rem; }
</style>
"""
