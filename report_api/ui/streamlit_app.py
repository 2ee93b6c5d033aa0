# -*- coding: utf-8 -*-
# Run with: streamlit run report_api/ui/streamlit_app.py
import streamlit as st

from report_api.core.config import load_settings
from report_api.core.logging import configure_logging
from report_api.ui.client import ReportClient, SubmitOutcome
from report_api.ui.form import (
    DETAIL_OPTIONS,
    MIN_YEAR_BUILT,
    PROPERTY_TYPES,
    FormState,
    FormStore,
    max_year_built,
)

FIELD_KEYS = ["address", "property_type", "surface", "year_built", "notes", "extra_context", "detail_level"]
NUMBER_KEYS = ("surface", "year_built")

settings = load_settings()
configure_logging(settings.LOG_LEVEL)
store = FormStore(settings.FORM_STATE_PATH)

@st.cache_resource
def get_client() -> ReportClient:
    return ReportClient(settings.REPORT_API_URL, timeout=settings.UI_REQUEST_TIMEOUT_SECONDS)

def _bounded(value, low, high, kind):
    try:
        number = kind(float(value))
    except (TypeError, ValueError):
        return None
    if number < low or (high is not None and number > high):
        return None
    return number

st.set_page_config(page_title="TiBreton Immo Expert – Générateur de rapports", layout="wide")

# --- session state init (saved values are read once per session) ---
if "form_loaded" not in st.session_state:
    saved = store.load()
    for key in FIELD_KEYS:
        st.session_state[key] = getattr(saved, key)
    # number inputs want None, not "", and reject out-of-range values
    st.session_state.surface = _bounded(st.session_state.surface, 0, None, float)
    st.session_state.year_built = _bounded(st.session_state.year_built, MIN_YEAR_BUILT, max_year_built(), int)
    if st.session_state.detail_level not in DETAIL_OPTIONS:
        st.session_state.detail_level = "standard"
    st.session_state.outcome = SubmitOutcome()
    st.session_state.loading = False
    st.session_state.form_loaded = True

def current_form() -> FormState:
    values = {key: st.session_state[key] for key in FIELD_KEYS}
    for key in NUMBER_KEYS:
        if values[key] is None:
            values[key] = ""
    return FormState(**values)

# --- callbacks ---
def persist_cb():
    store.save(current_form())

def submit_cb():
    # clears the previous result; the next run sees `loading` and submits
    st.session_state.outcome = SubmitOutcome()
    st.session_state.loading = True

# --- header ---
st.caption("TIBRETON IMMO EXPERT")
st.title("Générateur de rapports d’expertise immobilière")
st.write("Générez vos rapports d’expertise à partir de vos notes de visite et d’une analyse de marché localisée.")

left, right = st.columns([1, 1], gap="large")

with left:
    col_a, col_b = st.columns(2)
    with col_a:
        st.text_input(
            "Adresse du bien *",
            key="address",
            placeholder="Ex : 12 rue de Bretagne, 35000 Rennes",
            on_change=persist_cb,
        )
        st.number_input(
            "Surface approximative (m²)",
            key="surface",
            min_value=0.0,
            step=1.0,
            placeholder="Ex : 120",
            on_change=persist_cb,
        )
    with col_b:
        options = list(PROPERTY_TYPES)
        if st.session_state.property_type and st.session_state.property_type not in options:
            options.append(st.session_state.property_type)
        st.selectbox("Type de bien *", options, key="property_type", on_change=persist_cb)
        st.number_input(
            "Année de construction approximative",
            key="year_built",
            min_value=MIN_YEAR_BUILT,
            max_value=max_year_built(),
            step=1,
            placeholder="Ex : 1998",
            on_change=persist_cb,
        )

    st.text_area(
        "Notes de visite, commentaires ou transcription vocale *",
        key="notes",
        height=180,
        placeholder="Coller ici vos notes brutes, bullet points, transcription vocale, etc.",
        on_change=persist_cb,
    )
    st.text_area(
        "Commentaires supplémentaires / Contexte (facultatif)",
        key="extra_context",
        height=90,
        placeholder="Contexte client, contraintes, éléments à approfondir...",
        on_change=persist_cb,
    )
    st.radio(
        "Niveau de détail du rapport",
        list(DETAIL_OPTIONS),
        key="detail_level",
        format_func=DETAIL_OPTIONS.get,
        horizontal=True,
        on_change=persist_cb,
    )

    form = current_form()
    loading = st.session_state.loading
    st.button(
        "Génération en cours..." if loading else "Générer le rapport d’expertise",
        type="primary",
        disabled=not form.can_submit(loading=loading),
        on_click=submit_cb,
    )
    if loading:
        # The button above is already rendered disabled for this run
        try:
            with st.spinner("Génération en cours..."):
                st.session_state.outcome = get_client().submit(form)
        finally:
            st.session_state.loading = False
        st.rerun()

    outcome: SubmitOutcome = st.session_state.outcome
    if outcome.error:
        st.error(outcome.error)

    st.info(
        "**Astuces de préparation**\n\n"
        "- Ajoutez vos points clés de visite, même en vrac ou en bullet points.\n"
        "- Indiquez l’adresse exacte pour contextualiser la synthèse de marché.\n"
        "- Complétez le contexte client pour des recommandations plus pertinentes.\n"
        "- L’outil assiste votre expertise, il ne remplace pas votre jugement professionnel."
    )

with right:
    outcome = st.session_state.outcome
    if not outcome.report:
        st.markdown("Le rapport généré s’affichera ici après analyse de vos notes.")
    else:
        report_tab, market_tab = st.tabs(["Rapport d’expertise complet", "Synthèse de marché localisée"])
        with report_tab:
            st.markdown(outcome.report)
            # code blocks carry a copy-to-clipboard control
            with st.expander("Copier le rapport"):
                st.code(outcome.report, language="markdown")
        with market_tab:
            st.markdown(outcome.market_pane)
            with st.expander("Copier la synthèse de marché"):
                st.code(outcome.market_summary or outcome.report, language="markdown")
