import streamlit as st

from tace.models.rules import RULES


def apply_styling():
    """Apply global CSS styling based on configuration."""

    # Rate level classes from RULES
    css = "<style>\n"
    for level, color in RULES.rate_colors.items():
        css += f".rate-{level} {{ background-color: {color} !important; font-weight: bold; }}\n"

    # Additional static styles
    css += """
    .kpi-card { padding: 1rem; border-radius: 8px; background: linear-gradient(135deg, #BD5CCA 0%, #764ba2 100%); color: white; margin: 0.5rem 0; }
    .kpi-value { font-size: 2rem; font-weight: bold; }
    .kpi-label { font-size: 0.9rem; opacity: 0.9; }

    /* Improve dataframe density */
    div[data-testid="stDataFrame"] div[data-testid="stTable"] { font-size: 0.8rem; }

    /* Active tab highlight */
    button[data-baseweb="tab"][aria-selected="true"] {
        background-color: #BD5CCA !important;
        color: white !important;
        border-radius: 4px;
        font-weight: bold;
    }

    /* Hide Streamlit deploy button */
    .stDeployButton { display: none !important; }

    </style>
    """

    st.markdown(css, unsafe_allow_html=True)


def style_rate_rows(df):
    """Color the 'Valeur' cell of rate rows by level."""
    from tace.ui.tables import rate_level

    def _row_style(row):
        styles = [""] * len(row)
        if row.get("Type") == "rate":
            try:
                value = float(str(row["Valeur"]).replace("%", "").strip())
            except ValueError:
                return styles
            color = RULES.rate_colors.get(rate_level(value), "")
            idx = list(row.index).index("Valeur")
            styles[idx] = f"background-color: {color}; font-weight: bold"
        elif row.get("Type") == "title":
            styles = ["font-weight: bold"] * len(row)
        return styles

    return df.style.apply(_row_style, axis=1)
