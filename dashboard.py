"""
ADA Staking Simulator - Streamlit Dashboard
===========================================

Interactive dashboard for exploring compounding staking rewards under a
daily price drift.

Run with: streamlit run dashboard.py
"""

import io
from typing import Any

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from ada_staking_simulator import (
    InvalidConfiguration,
    PoolConfig,
    RunOptions,
    SensitivityMatrixConfig,
    calculate_staked_pool,
    compute_sensitivity_matrix,
    format_currency,
    format_percentage,
)


# =============================================================================
# Page Configuration
# =============================================================================

st.set_page_config(
    page_title="ADA Staking Simulator",
    page_icon="₳",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: 700;
        color: #1E3A5F;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.1rem;
        color: #666;
        margin-bottom: 2rem;
    }
    .stMetric {
        background-color: #f8f9fa;
        padding: 1rem;
        border-radius: 0.5rem;
        border-left: 4px solid #0033ad;
    }
    .stMetric label {
        color: #555 !important;
    }
    .stMetric [data-testid="stMetricValue"] {
        color: #1E3A5F !important;
    }
</style>
""", unsafe_allow_html=True)


# =============================================================================
# Helper Functions
# =============================================================================

@st.cache_data
def run_simulation(
    principal_amount: float,
    initial_price: float,
    daily_price_multiplier: float,
    annual_yield_fraction: float,
    epoch_days: int,
    years_held: float,
) -> dict[str, Any]:
    """Run simulation and return results (cached)."""

    config = PoolConfig(
        principal_amount=principal_amount,
        initial_price=initial_price,
        daily_price_multiplier=daily_price_multiplier,
        annual_yield_fraction=annual_yield_fraction,
        epoch_days=epoch_days,
        years_held=years_held,
    )

    result = calculate_staked_pool(config, RunOptions(generate_csv=True, generate_graph=True))

    return {
        "df": result.to_dataframe(),
        "stats": result.get_summary_statistics(config),
        "config": config,
    }


def compute_sensitivity_df(
    config: PoolConfig,
    matrix_config: SensitivityMatrixConfig | None,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Compute sensitivity matrices and return as DataFrames."""

    result = compute_sensitivity_matrix(config, matrix_config)

    multiplier_cols = [f"x{m:.4f}" for m in result.multiplier_levels]
    yield_idx = [f"{y:.2%}" for y in result.yield_levels]

    df_value = pd.DataFrame(
        result.total_value,
        index=yield_idx,
        columns=multiplier_cols,
    )
    df_value.index.name = "Annual Yield"

    df_yield = pd.DataFrame(
        result.yield_percentage,
        index=yield_idx,
        columns=multiplier_cols,
    )
    df_yield.index.name = "Annual Yield"

    return df_value, df_yield


def create_line_chart(
    df: pd.DataFrame,
    column: str,
    title: str,
    yaxis_title: str,
    color: str,
    tickformat: str,
) -> go.Figure:
    """Create a single-series line chart over days."""
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=df["Day"],
        y=df[column],
        name=yaxis_title,
        mode="lines",
        line=dict(color=color, width=3),
    ))

    fig.update_layout(
        title=dict(
            text=title,
            font=dict(size=20, color="#1E3A5F"),
        ),
        xaxis_title="Day",
        yaxis_title=yaxis_title,
        template="plotly_white",
        hovermode="x unified",
    )

    fig.update_yaxes(tickformat=tickformat)

    return fig


def create_growth_chart(df: pd.DataFrame) -> go.Figure:
    """Create combined ADA balance and total value chart."""
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=df["Day"],
        y=df["ADA"],
        name="ADA (₳)",
        mode="lines",
        line=dict(color="#0033ad", width=3),
    ))

    fig.add_trace(go.Scatter(
        x=df["Day"],
        y=df["Total"],
        name="Total Value ($)",
        mode="lines",
        line=dict(color="#c0392b", width=3),
        yaxis="y2",
    ))

    fig.update_layout(
        title=dict(
            text="Cardano Staking Growth",
            font=dict(size=20, color="#1E3A5F"),
        ),
        xaxis_title="Day",
        yaxis=dict(
            title="ADA (₳)",
            tickformat=",.2f",
            side="left",
        ),
        yaxis2=dict(
            title="Total Value ($)",
            tickformat="$,.0f",
            overlaying="y",
            side="right",
        ),
        template="plotly_white",
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="right",
            x=1,
        ),
        hovermode="x unified",
    )

    return fig


def create_sensitivity_heatmap(df: pd.DataFrame, title: str, text_format) -> go.Figure:
    """Create sensitivity matrix heatmap."""

    z_values = df.values
    text_values = [[text_format(val) for val in row] for row in z_values]

    fig = go.Figure(data=go.Heatmap(
        z=z_values,
        x=df.columns.tolist(),
        y=df.index.tolist(),
        colorscale="RdYlGn",
        text=text_values,
        texttemplate="%{text}",
        textfont={"size": 11},
        hovertemplate="Yield: %{y}<br>Multiplier: %{x}<br>Value: %{text}<extra></extra>",
    ))

    fig.update_layout(
        title=dict(
            text=title,
            font=dict(size=18, color="#1E3A5F"),
        ),
        xaxis_title="Daily Price Multiplier",
        yaxis_title="Annual Yield",
        template="plotly_white",
        height=400,
    )

    return fig


def results_to_excel(df: pd.DataFrame, stats: dict, sensitivity: tuple) -> bytes:
    """Convert results to Excel file."""
    output = io.BytesIO()

    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Daily Data", index=False)

        stats_df = pd.DataFrame([stats]).T
        stats_df.columns = ["Value"]
        stats_df.to_excel(writer, sheet_name="Summary")

        df_value, df_yield = sensitivity
        df_value.to_excel(writer, sheet_name="Sensitivity - Value")
        df_yield.to_excel(writer, sheet_name="Sensitivity - Yield %")

    return output.getvalue()


# =============================================================================
# Sidebar Configuration
# =============================================================================

st.sidebar.markdown("## ⚙️ Pool Parameters")

with st.sidebar.expander("₳ Position", expanded=True):
    principal_amount = st.number_input(
        "Staked ADA",
        min_value=0.0,
        max_value=1_000_000_000.0,
        value=1000.0,
        step=100.0,
    )
    initial_price = st.number_input(
        "Initial Price ($)",
        min_value=0.0,
        max_value=1000.0,
        value=1.0,
        step=0.05,
    )

with st.sidebar.expander("📅 Time Settings", expanded=True):
    years_held = st.slider("Years Holding", 0, 30, 5)
    epoch_days = st.slider("Epoch Length (days)", 1, 30, 5)

with st.sidebar.expander("📈 Rates", expanded=True):
    annual_yield_fraction = st.slider(
        "Annual Staking Yield",
        min_value=0.0,
        max_value=0.20,
        value=0.045,
        step=0.005,
        format="%.3f",
        help="Fractional annual reward rate, 0.05 = 5%",
    )
    daily_price_multiplier = st.number_input(
        "Daily Price Multiplier",
        min_value=0.0,
        max_value=2.0,
        value=1.0005,
        step=0.0001,
        format="%.4f",
        help="Multiplicative daily price change, 1.01 = +1% per day",
    )

# Sensitivity Configuration
st.sidebar.markdown("---")
st.sidebar.markdown("## 📊 Sensitivity Settings")

with st.sidebar.expander("Yield Levels", expanded=False):
    yield_input = st.text_area(
        "Annual yields (one per line)",
        value="0.02\n0.03\n0.045\n0.05\n0.06\n0.08",
        height=150,
    )

with st.sidebar.expander("Multiplier Levels", expanded=False):
    multiplier_input = st.text_area(
        "Daily price multipliers (one per line)",
        value="0.999\n1.0\n1.0005\n1.001\n1.002",
        height=150,
    )

try:
    matrix_config = SensitivityMatrixConfig.parse(yield_input, multiplier_input)
except InvalidConfiguration as e:
    st.sidebar.error(f"Invalid sensitivity levels, showing the default grid instead. {e}")
    matrix_config = None


# =============================================================================
# Main Content
# =============================================================================

st.markdown('<p class="main-header">₳ ADA Staking Simulator</p>', unsafe_allow_html=True)
st.markdown(
    '<p class="sub-header">Compounding epoch rewards with a deterministic daily price drift</p>',
    unsafe_allow_html=True,
)

with st.spinner("Running simulation..."):
    results = run_simulation(
        principal_amount=principal_amount,
        initial_price=initial_price,
        daily_price_multiplier=daily_price_multiplier,
        annual_yield_fraction=annual_yield_fraction,
        epoch_days=epoch_days,
        years_held=years_held,
    )

df = results["df"]
stats = results["stats"]
config = results["config"]

sensitivity = compute_sensitivity_df(config, matrix_config)
df_value, df_yield = sensitivity

# =============================================================================
# Key Metrics
# =============================================================================

st.markdown("### 📈 Key Metrics")

col1, col2, col3, col4 = st.columns(4)

with col1:
    st.metric(
        label="Final ADA",
        value=f"₳{stats['final_balance']:,.2f}",
        delta=f"₳{stats['rewards_earned']:,.2f} rewards",
    )

with col2:
    st.metric(
        label="Final Price",
        value=f"${stats['final_price']:,.4f}",
    )

with col3:
    st.metric(
        label="Final Value",
        value=format_currency(stats["total_value"]),
    )

with col4:
    st.metric(
        label="Yield (of initial)",
        value=format_percentage(stats["yield_percentage"]),
        delta=format_percentage(stats["gain_percentage"], signed=True),
    )

st.markdown("---")

# =============================================================================
# Charts
# =============================================================================

st.markdown("### 📊 Simulation Results")

st.plotly_chart(create_growth_chart(df), use_container_width=True)

col_c1, col_c2 = st.columns(2)

with col_c1:
    st.plotly_chart(
        create_line_chart(df, "ADA", "Staked Balance", "ADA (₳)", "#0033ad", ",.2f"),
        use_container_width=True,
    )

with col_c2:
    st.plotly_chart(
        create_line_chart(df, "Price", "Reference Price", "Price ($)", "#27ae60", "$,.4f"),
        use_container_width=True,
    )

st.markdown("---")

# =============================================================================
# Sensitivity Section
# =============================================================================

st.markdown("### 💰 Annual Yield × Price Multiplier")

st.markdown(f"""
Final position value after **{config.years_held} years** for each combination of:
- **Annual Yield**: staking reward rate, compounding every {config.epoch_days} days
- **Daily Price Multiplier**: deterministic daily drift of the ADA price
""")

matrix_type = st.selectbox(
    "Select Matrix",
    ["Final Value", "Yield % of Initial"],
    index=0,
)

if matrix_type == "Final Value":
    st.plotly_chart(
        create_sensitivity_heatmap(df_value, "Final Value", format_currency),
        use_container_width=True,
    )
    st.dataframe(df_value.map(format_currency), use_container_width=True)
else:
    st.plotly_chart(
        create_sensitivity_heatmap(df_yield, "Yield % of Initial", format_percentage),
        use_container_width=True,
    )
    st.dataframe(df_yield.map(format_percentage), use_container_width=True)

# =============================================================================
# Data Download
# =============================================================================

st.markdown("---")
st.markdown("### 📥 Download Results")

col_dl1, col_dl2 = st.columns(2)

with col_dl1:
    csv_data = df.iloc[1:].to_csv(index=False)
    st.download_button(
        label="📄 Download Daily Data (CSV)",
        data=csv_data,
        file_name="raw_ada_calc_data.csv",
        mime="text/csv",
    )

with col_dl2:
    excel_data = results_to_excel(df, stats, sensitivity)
    st.download_button(
        label="📗 Download Full Report (Excel)",
        data=excel_data,
        file_name="ada_staking_report.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )

# =============================================================================
# Raw Data
# =============================================================================

with st.expander("🔍 View Raw Daily Data", expanded=False):
    st.dataframe(df, use_container_width=True)

with st.expander("📊 Summary Statistics", expanded=False):
    price_change = stats["price_change"]
    stats_display = {
        "Holding Period": f"{stats['years_held']} years ({stats['total_days']} days)",
        "Epoch Length": f"{stats['epoch_days']} days",
        "Payouts": stats["payout_count"],
        "Initial ADA": f"₳{stats['initial_balance']:,.6f}",
        "Final ADA": f"₳{stats['final_balance']:,.6f}",
        "Rewards Earned": f"₳{stats['rewards_earned']:,.6f}",
        "Initial ADA Per Year": f"₳{stats['initial_annual_reward']:,.6f}",
        "Initial Price": f"${stats['initial_price']:,.4f}",
        "Final Price": f"${stats['final_price']:,.4f}",
        "Price Change": format_percentage(None if price_change is None else price_change * 100, signed=True),
        "Initial Value": format_currency(stats["initial_value"]),
        "Final Value": format_currency(stats["total_value"]),
        "Yield (of initial)": format_percentage(stats["yield_percentage"]),
        "Gain": format_percentage(stats["gain_percentage"], signed=True),
    }

    stats_df = pd.DataFrame.from_dict(stats_display, orient="index", columns=["Value"])
    st.table(stats_df.astype(str))

# =============================================================================
# Footer
# =============================================================================

st.markdown("---")
st.markdown(
    """
    <div style="text-align: center; color: #888; font-size: 0.9rem;">
        ADA Staking Simulator | Not official or investment advice | Built with Streamlit & Plotly
    </div>
    """,
    unsafe_allow_html=True,
)
