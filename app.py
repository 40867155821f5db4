"""Streamlit UI for extracting and confirming COPADE invoice data."""

import streamlit as st
import json
from dotenv import load_dotenv
from copade.pipeline import ExtractionPipeline
from copade.export import format_value, to_labeled_text, to_values_text, to_json_dict, NOT_FOUND
from copade.schema import (
    ORDERED_KEYS,
    DISCOUNT_KEYS,
    FIELD_LABELS,
    DISCOUNT_LABELS,
    DISCOUNT_SECTION_TITLE,
    DISCOUNT_KEY_PREFIX,
)

# Load environment variables
load_dotenv()

TOKENS_PER_ROW = 8


def escape_label(text: str) -> str:
    """Button labels render markdown; keep amounts like $1,234.56 literal."""
    return text.replace("$", "\\$")


# Page configuration
st.set_page_config(
    page_title="COPADE Data Extractor",
    page_icon="📄",
    layout="wide"
)

st.title("📄 COPADE Invoice Data Extractor")
st.markdown("""
Extract structured data from COPADE invoice PDFs:
- **pdfplumber** reads the text of the first pages
- **Rule-based extraction** finds labeled amounts, dates and identifiers
- **Manual selection** lets you fix any field from the document text
""")

st.divider()

if 'step' not in st.session_state:
    st.session_state.step = 'upload'


def reset():
    """Return to the upload step and forget the current document."""
    for key in ('extraction_result', 'correction_session', 'final_record', 'error'):
        st.session_state.pop(key, None)
    st.session_state.step = 'upload'


def select_field(key: str):
    st.session_state.correction_session.select_field(key)


def toggle_token(index: int):
    st.session_state.correction_session.toggle_token(index)


def submit_selection():
    st.session_state.final_record = st.session_state.correction_session.finalize()
    st.session_state.step = 'results'


def render_field_button(session, key: str, label: str):
    """Field button showing the pending selection or the committed value."""
    value = session.display_value(key)
    is_active = session.active_key == key
    caption = value if value else "Click to select..."
    st.button(
        escape_label(f"{label} {caption}"),
        key=f"field_{key}",
        type="primary" if is_active else "secondary",
        on_click=select_field,
        args=(key,),
        use_container_width=True
    )


# Step 1: Upload
if st.session_state.step == 'upload':
    st.header("📤 Upload PDF")

    if st.session_state.get('error'):
        st.error(st.session_state.error)

    uploaded_file = st.file_uploader(
        "Choose a PDF file",
        type=['pdf'],
        help="Upload a COPADE invoice PDF with a text layer"
    )

    extract_button = st.button(
        "🚀 Run Extraction",
        type="primary",
        use_container_width=True,
        disabled=uploaded_file is None
    )

    if extract_button and uploaded_file is not None:
        with st.spinner("Analyzing your document... this may take a moment."):
            try:
                pipeline = ExtractionPipeline()
                result = pipeline.extract_from_bytes(uploaded_file.read())
                st.session_state.extraction_result = result
                st.session_state.correction_session = pipeline.start_correction(result)
                st.session_state.pop('error', None)
                st.session_state.step = 'selection'
            except Exception as e:
                st.session_state.error = f"Failed to process PDF: {e}"
        st.rerun()

# Step 2: Interactive selection
elif st.session_state.step == 'selection':
    session = st.session_state.correction_session

    st.header("✏️ Confirm Extracted Data")
    st.markdown("Click a label, then click the correct value(s) from the document preview.")

    col1, col2 = st.columns([1, 1])

    with col1:
        st.markdown("### 📋 Fields")
        for key in ORDERED_KEYS:
            render_field_button(session, key, FIELD_LABELS[key])

        st.markdown(f"### 💸 {DISCOUNT_SECTION_TITLE}")
        for key in DISCOUNT_KEYS:
            render_field_button(session, f"{DISCOUNT_KEY_PREFIX}.{key}", DISCOUNT_LABELS[key])

    with col2:
        st.markdown("### 🔍 Document Preview")
        if session.active_key:
            st.info(f"Selecting value for **{session.active_key}**")
        else:
            st.caption("Select a field to enable the document tokens.")

        selected = set(session.selected_indices)
        preview = st.container(height=600)
        with preview:
            for row_start in range(0, len(session.tokens), TOKENS_PER_ROW):
                cols = st.columns(TOKENS_PER_ROW)
                for offset, token in enumerate(session.tokens[row_start:row_start + TOKENS_PER_ROW]):
                    index = row_start + offset
                    with cols[offset]:
                        st.button(
                            escape_label(token),
                            key=f"token_{index}",
                            type="primary" if index in selected else "secondary",
                            disabled=session.active_key is None,
                            on_click=toggle_token,
                            args=(index,)
                        )

    st.divider()
    action_cols = st.columns([1, 1])
    with action_cols[0]:
        st.button("✅ Process Data", type="primary", use_container_width=True, on_click=submit_selection)
    with action_cols[1]:
        st.button("↩️ Start Over", use_container_width=True, on_click=reset)

# Step 3: Results
elif st.session_state.step == 'results':
    record = st.session_state.final_record
    result = st.session_state.extraction_result
    session = st.session_state.correction_session

    st.header("📊 Extracted Information")

    remove_commas = st.checkbox("Remove commas from numbers", value=True)

    tab1, tab2, tab3, tab4 = st.tabs(["📋 Fields", "📎 Copy", "📄 JSON", "🔍 Raw Text"])

    def display_field(label: str, value):
        """Display a field with label and value."""
        if not value:
            display_value = f"*{NOT_FOUND}*"
            color = "gray"
        else:
            display_value = format_value(value, remove_commas)
            color = "black"

        st.markdown(f"**{label}** <span style='color: {color}'>{display_value}</span>", unsafe_allow_html=True)

    with tab1:
        fields_col, discount_col = st.columns([2, 1])
        with fields_col:
            for key in ORDERED_KEYS:
                display_field(FIELD_LABELS[key], getattr(record, key))
        with discount_col:
            if record.descuento is not None:
                st.markdown(f"### {DISCOUNT_SECTION_TITLE}")
                for key in DISCOUNT_KEYS:
                    display_field(DISCOUNT_LABELS[key], getattr(record.descuento, key))

        if session.corrections_applied:
            with st.expander("Corrections Applied", expanded=False):
                for correction in session.corrections_applied:
                    st.success(f"✓ {correction}")

    with tab2:
        st.subheader("Copy All")
        st.code(to_labeled_text(record, remove_commas=remove_commas), language=None)
        st.subheader("Copy Values")
        st.code(to_values_text(record, remove_commas=remove_commas), language=None)

    with tab3:
        st.subheader("JSON Output")
        json_output = {
            **result.to_dict(),
            'extracted_data': to_json_dict(record, remove_commas=remove_commas),
            'corrections_applied': session.corrections_applied,
        }
        st.json(json_output)

        json_str = json.dumps(json_output, indent=2, ensure_ascii=False, default=str)
        st.download_button(
            label="📥 Download JSON",
            data=json_str,
            file_name="extraction_result.json",
            mime="application/json"
        )

    with tab4:
        st.subheader("Raw PDF Text")
        st.text_area(
            "PDF Text",
            value=result.full_text,
            height=400,
            disabled=False
        )

    st.button("📤 Upload Another PDF", type="primary", on_click=reset)

# Footer
st.divider()
st.markdown("""
<div style='text-align: center; color: gray;'>
    <small>COPADE Data Extractor | Rule-based extraction with manual confirmation</small>
</div>
""", unsafe_allow_html=True)
