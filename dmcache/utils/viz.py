import plotly.express as px
import pandas as pd

def export_traffic_chart(rows, path: str):
    if not rows:
        with open(path, "w") as f:
            f.write("<h1>Memory Traffic</h1><p>No data to display.</p>")
        return

    df = pd.DataFrame(rows)
    df = df.melt(id_vars=["mode_ID", "write_policy"], value_vars=["NRA", "NWA"],
                 var_name="direction", value_name="words")
    df["mode_ID"] = df["mode_ID"].astype(str)

    fig = px.bar(
        df,
        x="mode_ID",
        y="words",
        color="direction",
        barmode="group",
        hover_data=["write_policy"],
        title="Cache Controller Memory Traffic per Mode",
        labels={"mode_ID": "Mode", "words": "Words transferred", "direction": "Access"}
    )
    fig.update_layout(
        font=dict(family="Courier New, monospace", size=12),
        legend_title="Access"
    )

    fig.write_html(path, include_plotlyjs="cdn", full_html=True)

def export_hit_ratio_ascii(rows):
    if not rows:
        return "No modes simulated."

    width = 50
    chart = "Cache Hit Ratio per Mode (ASCII)\n"
    chart += "" + ("-" * (width + 20)) + "\n"
    for row in rows:
        ratio = row.get('hit_ratio', 0.0)
        bar = '#' * int(round(ratio * width))
        chart += f"mode {row['mode_ID']:>2} |{bar:<{width}}| {ratio:6.2%}\n"
    chart += "" + ("-" * (width + 20)) + "\n"

    return chart
