import csv
import io

import streamlit as st

from src.formatting.strip import strip_html
from src.models.herb import Herb
from src.sources.herbs import load_herbs

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Herb Reference",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# ---------------------------------------------------------------------------
# CSS
# ---------------------------------------------------------------------------
st.markdown("""
<style>
@import url('https://fonts.googleapis.com/css2?family=Fredoka+One&family=Nunito:wght@300;400;700&family=JetBrains+Mono:wght@400&display=swap');

#MainMenu {visibility: hidden;}
footer {visibility: hidden;}

:root {
    --deep-green: #1F3B2D;
    --sage: #6B8F71;
    --turmeric: #E0A526;
    --off-white: #F7F5F2;
    --mint: #E6F0E8;
    --slate: #5A6275;
}

.stApp { font-family: 'Nunito', sans-serif; }
h1, h2, h3 { font-family: 'Fredoka One', cursive; color: var(--deep-green); }

.herb-card {
    background: white; border-radius: 12px; padding: 1.2rem;
    margin-bottom: 1rem; border-left: 5px solid var(--sage);
    box-shadow: 0 2px 8px rgba(0,0,0,0.06);
}
.herb-card h3 { margin: 0 0 0.3rem 0; font-size: 1.1rem; }
.herb-card .summary { color: var(--slate); font-size: 0.92rem; }
.herb-card .notes { font-size: 0.9rem; margin-top: 0.5rem; }
.herb-tag {
    display: inline-block; background: var(--mint); color: var(--deep-green);
    padding: 2px 10px; border-radius: 12px; font-size: 0.82rem;
    margin: 2px 3px; font-family: 'JetBrains Mono', monospace;
}
.font-bold { font-weight: 700; }
.italic { font-style: italic; }
.text-indigo-600 { color: #4f46e5; }
.hover\\:underline:hover { text-decoration: underline; }
.disclaimer {
    font-size: 0.78rem; color: var(--slate);
    border-top: 1px solid #ddd; padding-top: 0.8rem; margin-top: 1.5rem;
}
</style>
""", unsafe_allow_html=True)

# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
if "herbs" not in st.session_state:
    st.session_state.herbs = load_herbs()

st.title("Herb Reference")

with st.sidebar:
    st.markdown("### Display")
    detailed = st.toggle("Detailed view", value=False,
                         help="Concise view hides references and editorial notes.")
    expand_books = st.toggle("Expand book citations", value=True,
                             help="Show 'Lad, p. 42' as the full book title.")

# ---------------------------------------------------------------------------
# Herb list
# ---------------------------------------------------------------------------
herbs: list[Herb] = st.session_state.herbs

if not herbs:
    st.info("No herbs found. Add entries to **data/herbs.yaml**.")
else:
    f1, f2 = st.columns([4, 1])
    with f1:
        query = st.text_input("Search", placeholder="Name or tag, e.g. adaptogen")
    with f2:
        csv_buffer = io.StringIO()
        writer = csv.writer(csv_buffer)
        writer.writerow(["Name", "Tags", "Summary"])
        for herb in herbs:
            writer.writerow([herb.name, ", ".join(herb.tags), herb.concise_summary])
        st.download_button("CSV", csv_buffer.getvalue(), "herbs.csv", "text/csv",
                           use_container_width=True)

    shown = [h for h in herbs if h.matches(query)]
    st.caption(f"Showing {len(shown)} of {len(herbs)}")

    for herb in shown:
        summary = strip_html(herb.summary) if detailed else herb.concise_summary
        notes = herb.detailed_notes_html(expand_books=expand_books) if detailed else ""
        st.markdown(f"""
        <div class="herb-card">
            <h3>{herb.name}</h3>
            <div class="summary">{summary or "No summary."}</div>
            {f'<div class="notes">{notes}</div>' if notes else ""}
        </div>
        """, unsafe_allow_html=True)

        if herb.tags:
            st.markdown(
                " ".join(f'<span class="herb-tag">{t}</span>' for t in herb.tags[:8]),
                unsafe_allow_html=True,
            )

# ---------------------------------------------------------------------------
# Footer
# ---------------------------------------------------------------------------
st.markdown("""
<div class="disclaimer">
<b>Disclaimer:</b> Herb Reference summarises traditional and published sources.
Ratings reflect the cited material only.
<b>Not medical advice.</b>
</div>
""", unsafe_allow_html=True)
