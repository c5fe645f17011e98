import io
import json
import logging
from typing import Dict, Optional

import altair as alt
import pandas as pd
import streamlit as st

from vizgallery.catalog import CHART_CATEGORIES, COMPLEXITY_LEVELS, ChartCatalog
from vizgallery.charts import build_default_catalog
from vizgallery.compatibility import filter_charts
from vizgallery.data_profiler import DatasetProfile, infer_column_type, profile_dataframe
from vizgallery.editor import EditorSession
from vizgallery.errors import GalleryError
from vizgallery.settings import load_settings
from vizgallery.spec_parsers import summarize_spec
from vizgallery.spec_updater import with_inline_data
from vizgallery.vega_types import EDITOR_MARKS, ENCODING_CHANNELS, FIELD_TYPES

settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("vizgallery.app")


# -----------------------------
# Styling (UI polish)
# -----------------------------
st.set_page_config(
    page_title="Vega Gallery",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown(
    """
<style>
.stApp {
  background: radial-gradient(1200px 700px at 15% 10%, rgba(99, 102, 241, 0.10), transparent 60%),
              radial-gradient(900px 600px at 85% 15%, rgba(16, 185, 129, 0.10), transparent 55%),
              #0b1220;
  color: #e5e7eb;
}
section[data-testid="stSidebar"] {
  background: linear-gradient(180deg, rgba(255,255,255,0.06), rgba(255,255,255,0.02));
  border-right: 1px solid rgba(255,255,255,0.10);
}
#MainMenu {visibility: hidden;}
footer {visibility: hidden;}

.vg-card {
  background: rgba(255,255,255,0.06);
  border: 1px solid rgba(255,255,255,0.10);
  border-radius: 14px;
  padding: 12px 14px;
  margin-bottom: 10px;
}
.vg-muted { color: rgba(229,231,235,0.80); }
.vg-badge {
  display: inline-block;
  padding: 4px 10px;
  border-radius: 999px;
  font-size: 0.80rem;
  border: 1px solid rgba(255,255,255,0.12);
}
.vg-badge-ok  { border-color: rgba(16,185,129,0.35); background: rgba(16,185,129,0.10); }
.vg-badge-off { border-color: rgba(244,63,94,0.35);  background: rgba(244,63,94,0.10); }
</style>
""",
    unsafe_allow_html=True,
)


# -----------------------------
# Catalog (built once per process)
# -----------------------------
@st.cache_resource
def get_catalog() -> ChartCatalog:
    return build_default_catalog(skip_invalid=settings.skip_invalid_charts)


try:
    catalog = get_catalog()
except GalleryError as e:
    logger.exception("chart catalog failed to load")
    st.error(f"Chart catalog failed to load: {e}")
    st.stop()


# -----------------------------
# Helpers for UI
# -----------------------------
def badge(satisfied: bool) -> str:
    if satisfied:
        return '<span class="vg-badge vg-badge-ok">compatible</span>'
    return '<span class="vg-badge vg-badge-off">needs data</span>'


def read_csv(content: bytes) -> pd.DataFrame:
    try:
        return pd.read_csv(io.BytesIO(content))
    except UnicodeDecodeError:
        return pd.read_csv(io.BytesIO(content), encoding="latin-1")


def start_session(chart_id: str) -> None:
    st.session_state["session"] = EditorSession(catalog.get(chart_id))
    st.session_state["chart_id"] = chart_id


def render_spec(spec: dict, df: Optional[pd.DataFrame]) -> None:
    renderable = with_inline_data(spec, df, max_rows=settings.preview_max_rows)
    try:
        st.altair_chart(alt.Chart.from_dict(renderable), use_container_width=True)
    except Exception as e:
        # the spec is valid by construction; preview failures come from the data
        logger.warning("preview failed: %s", e)
        st.info(f"Preview failed: {e}")
        st.code(json.dumps(spec, ensure_ascii=False, indent=2)[:4500])


# -----------------------------
# Session state
# -----------------------------
for key in ("session", "chart_id"):
    if key not in st.session_state:
        st.session_state[key] = None


# -----------------------------
# Header
# -----------------------------
st.markdown(
    """
<div class="vg-card">
  <div style="font-size:1.75rem;font-weight:800;line-height:1.1;">Vega Gallery</div>
  <div class="vg-muted" style="margin-top:6px;">Pick a chart that fits your data, then edit marks and encodings.</div>
</div>
""",
    unsafe_allow_html=True,
)


# -----------------------------
# Sidebar: Data input
# -----------------------------
df: Optional[pd.DataFrame] = None
profile: Optional[DatasetProfile] = None

with st.sidebar:
    st.markdown("## 📦 Dataset")
    csv_file = st.file_uploader("Upload CSV", type=["csv"])

    if csv_file is not None:
        try:
            df = read_csv(csv_file.getvalue())
        except (ValueError, pd.errors.ParserError) as e:
            st.error(f"CSV read error: {e}")
            df = None

    if df is not None:
        user_types: Dict[str, str] = {}
        with st.expander("Column types", expanded=False):
            for c in df.columns:
                inferred = infer_column_type(df[c], datetime_ratio=settings.datetime_parse_ratio)
                user_types[str(c)] = st.selectbox(
                    str(c), options=FIELD_TYPES, index=FIELD_TYPES.index(inferred), key=f"type_{c}",
                )
        profile = profile_dataframe(df, user_types, datetime_ratio=settings.datetime_parse_ratio)
        st.caption(f"Rows: {profile.row_count} | Cols: {len(profile.columns)}")
        for col in profile.columns:
            st.caption(f"{col.name}: {col.type} · unique {col.unique_values} · missing {col.missing_values}")


# -----------------------------
# Main tabs
# -----------------------------
tab_gallery, tab_editor, tab_spec = st.tabs(["🖼️ Gallery", "🛠️ Editor", "🧾 Spec"])

with tab_gallery:
    results = filter_charts(catalog, profile) if profile is not None else None
    if results is None:
        st.info("Upload a CSV to check which charts your data supports. All charts can still be opened with sample data.")

    f1, f2, f3, f4 = st.columns([3, 2, 2, 2])
    term = f1.text_input("Search", placeholder="title, description or tag")
    category_pick = f2.selectbox("Category", options=["All"] + list(CHART_CATEGORIES))
    complexity_pick = f3.selectbox("Complexity", options=["All"] + list(COMPLEXITY_LEVELS))
    sort_by = f4.selectbox("Sort by", options=["category", "complexity"])

    matches = catalog.search(
        term,
        category=None if category_pick == "All" else category_pick,
        complexity=None if complexity_pick == "All" else complexity_pick,
        sort_by=sort_by,
    )
    if not matches:
        st.info("No charts match the current filters.")

    if sort_by == "category":
        groups = [(c, [d for d in matches if d.category == c]) for c in CHART_CATEGORIES]
    else:
        groups = [(lvl, [d for d in matches if d.complexity == lvl]) for lvl in COMPLEXITY_LEVELS]

    for heading, defs in groups:
        if not defs:
            continue
        st.subheader(heading)
        cols = st.columns(3)
        for i, d in enumerate(defs):
            res = next((r for r in results if r.definition.id == d.id), None) if results else None
            with cols[i % 3]:
                status = badge(res.satisfied) if res is not None else ""
                missing = ""
                if res is not None and res.missing_fields:
                    missing = f"<div class='vg-muted'>missing: {', '.join(res.missing_fields)}</div>"
                elif res is not None and res.too_few_rows:
                    missing = f"<div class='vg-muted'>needs at least {d.data_requirements.min_data_points} rows</div>"
                st.markdown(
                    f"""
<div class="vg-card">
  <div style="display:flex;justify-content:space-between;gap:8px;"><strong>{d.title}</strong>{status}</div>
  <div class="vg-muted">{d.description}</div>
  <div class="vg-muted">{d.complexity}</div>
  {missing}
</div>
""",
                    unsafe_allow_html=True,
                )
                if st.button("Open in editor", key=f"open_{d.id}"):
                    start_session(d.id)
                    st.success(f"Opened **{d.title}** in the editor tab.")


with tab_editor:
    session: Optional[EditorSession] = st.session_state["session"]
    if session is None:
        st.info("Open a chart from the gallery first.")
    else:
        left, right = st.columns([1, 2], gap="large")
        with left:
            st.markdown(f"### {catalog.get(session.chart_id).title}")

            mark = st.selectbox("Mark", options=EDITOR_MARKS, key="mark_pick")
            if st.button("Apply mark"):
                session.set_mark(mark)

            st.markdown("#### Bind a column")
            if profile is None:
                st.caption("Upload a CSV to bind your own columns.")
            else:
                channel = st.selectbox("Channel", options=ENCODING_CHANNELS, key="bind_channel")
                col_name = st.selectbox("Column", options=profile.column_names(), key="bind_column")
                pinned = st.selectbox("Type", options=["auto"] + FIELD_TYPES, key="bind_type")
                if st.button("Bind"):
                    session.bind(profile.column(col_name), channel, None if pinned == "auto" else pinned)

            st.markdown("#### Remove a channel")
            to_clear = st.selectbox("Channel", options=ENCODING_CHANNELS, key="clear_channel")
            if st.button("Remove"):
                session.clear(to_clear)

            if st.button("Reset to gallery spec"):
                session.reset()

            st.caption(f"{len(session.history)} edit(s) applied")

        with right:
            spec = session.spec
            render_spec(spec, df)
            with st.expander("Summary", expanded=False):
                st.json(summarize_spec(spec))


with tab_spec:
    session = st.session_state["session"]
    if session is None:
        st.info("Open a chart from the gallery first.")
    else:
        spec = session.spec
        spec_json = json.dumps(spec, ensure_ascii=False, indent=2)
        st.code(spec_json[:8000], language="json")
        st.download_button(
            "⬇️ Download Vega-Lite JSON",
            data=spec_json.encode("utf-8"),
            file_name=f"{session.chart_id}.vl.json",
            mime="application/json",
        )
