"""
Grammar Fixer - Streamlit form

Paste text, get a corrected version back.
Run with: streamlit run app.py
"""
import streamlit as st

from grammar_fixer import ValidationError, correct
from grammar_fixer.ir import MAX_TEXT_LENGTH
from grammar_fixer.remote import LanguageToolClient, RemoteConfig

st.set_page_config(
    page_title="Grammar Fixer",
    page_icon="📝",
    layout="centered",
)

st.title("📝 Grammar Fixer")
st.markdown("Paste your text and get a grammar-corrected version.")


@st.cache_resource
def _client() -> LanguageToolClient:
    return LanguageToolClient(RemoteConfig.from_env())


original_text = st.text_area(
    "Text to correct",
    value=st.session_state.get("original_text", ""),
    height=220,
    max_chars=MAX_TEXT_LENGTH,
    help=f"Up to {MAX_TEXT_LENGTH:,} characters",
)

if st.button("✨ Correct Grammar", type="primary", use_container_width=True):
    st.session_state["original_text"] = original_text
    st.session_state.pop("result", None)
    st.session_state.pop("error", None)
    with st.spinner("Checking grammar..."):
        try:
            st.session_state["result"] = correct(original_text, client=_client())
        except ValidationError as e:
            st.session_state["error"] = str(e)

if "error" in st.session_state:
    st.error(st.session_state["error"])

# Show results if we have them in session state
if "result" in st.session_state:
    result = st.session_state["result"]

    if result.used_fallback:
        st.warning(f"Approximate correction: {result.error_message}")
    else:
        st.success(f"**Correction complete!** {len(result.changes)} fixes applied")

    st.markdown("### Corrected Text")
    st.text_area("Corrected", value=result.corrected_text, height=220, label_visibility="collapsed")

    if result.changes:
        with st.expander("What changed?", expanded=False):
            for change in reversed(result.changes):
                st.markdown(f"- ~~{change.original}~~ → **{change.replacement}**")

    if st.button("Correct Another Text"):
        for key in ["result", "error", "original_text"]:
            if key in st.session_state:
                del st.session_state[key]
        st.rerun()

# Footer
st.markdown("---")
st.markdown("*Powered by LanguageTool, with local rules when the service is unreachable.*")
