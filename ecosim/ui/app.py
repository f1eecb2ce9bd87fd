"""
Predator-Prey Grid — Streamlit Web Viewer

Pages:
  1. Home       — what the simulation does
  2. Single Run — step a simulation and watch the grid and populations
"""

import streamlit as st

# Must be the very first Streamlit command
st.set_page_config(
    page_title="Predator-Prey Grid",
    page_icon="🐾",
    layout="wide",
    initial_sidebar_state="expanded",
)


def main() -> None:
    """Main entry point for the Streamlit app."""

    st.sidebar.title("🐾 Predator-Prey Grid")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigation",
        options=["🏠 Home", "▶️ Single Run"],
        index=0,
    )

    if page == "🏠 Home":
        _render_home()
    elif page == "▶️ Single Run":
        from ecosim.ui.pages.sim_runner import render_sim_runner
        render_sim_runner()


def _render_home() -> None:
    """Render the home page."""
    st.title("🐾 Predator-Prey Grid")
    st.markdown("""
    A turn-based ecosystem on a bounded grid. Herbivores graze plants,
    carnivores hunt herbivores, obstacles block movement, and plants regrow
    every turn. The run ends when every animal is dead.

    ### One turn

    | Phase | What happens |
    |-------|--------------|
    | **Movement** | Every animal steps to a random free neighbor (or stays when boxed in) and loses 1 energy |
    | **Grazing** | A herbivore on a plant eats it: +20 energy |
    | **Hunting** | A carnivore on a herbivore eats it: +30 energy |
    | **Reproduction** | Herbivores at 60+, carnivores at 80+ pay 30 energy for one offspring with 30 |
    | **Mortality & regrowth** | Animals at 0 energy die; 1–7 new plants appear |
    """)


if __name__ == "__main__":
    main()
