"""
Single Run page for the web viewer.

Allows users to:
  - Start a simulation with chosen grid size, counts and seed
  - Step it one turn or many turns at a time
  - See the grid, the population chart and the latest events
"""

import pandas as pd
import streamlit as st

from ecosim.core.config import SimConfig, get_default_config
from ecosim.logging.run_manager import RunManager
from ecosim.simulation.driver import Simulation
from ecosim.simulation.metrics import MetricsCollector
from ecosim.ui.components.charts import births_and_deaths, energy_distribution, population_over_time
from ecosim.ui.components.grid_view import render_state_grid


# ---------------------------------------------------------------------------
# Session state helpers
# ---------------------------------------------------------------------------

_SESSION_KEYS = ("sim", "sim_metrics", "sim_run_manager")


def _init_session_state() -> None:
    for k in _SESSION_KEYS:
        if k not in st.session_state:
            st.session_state[k] = None


def _start(config: SimConfig, save_output: bool) -> None:
    sim = Simulation(config)
    metrics = MetricsCollector()
    metrics.collect(sim.state)
    run_manager = RunManager(config) if save_output else None
    if run_manager:
        run_manager.log_turn(metrics.history[-1])

    st.session_state.sim = sim
    st.session_state.sim_metrics = metrics
    st.session_state.sim_run_manager = run_manager


def _advance(turns: int) -> None:
    sim: Simulation = st.session_state.sim
    metrics: MetricsCollector = st.session_state.sim_metrics
    run_manager = st.session_state.sim_run_manager

    for _ in range(turns):
        if sim.is_collapsed:
            break
        events = sim.step()
        kpis = metrics.collect(sim.state)
        if run_manager:
            run_manager.log_turn(kpis, events)

    if sim.is_collapsed and run_manager:
        run_manager.finalize({
            "seed": sim.config.world.seed,
            "total_turns": sim.current_turn,
            "collapsed": True,
            "collapse_turn": sim.current_turn,
        })


# ---------------------------------------------------------------------------
# Main render
# ---------------------------------------------------------------------------

def render_sim_runner() -> None:
    """Render the single simulation runner page."""
    _init_session_state()
    st.title("▶️ Single Simulation Run")

    defaults = get_default_config()

    with st.expander("Setup", expanded=st.session_state.sim is None):
        col1, col2, col3 = st.columns(3)
        with col1:
            width = st.number_input("Width", 1, 100, defaults.world.width, key="sr_w")
            height = st.number_input("Height", 1, 100, defaults.world.height, key="sr_h")
            seed = st.number_input("Seed", 0, 999_999_999, defaults.world.seed, key="sr_seed")
        with col2:
            herbivores = st.number_input("Herbivores", 0, 1000,
                                         defaults.population.herbivore_count, key="sr_herb")
            carnivores = st.number_input("Carnivores", 0, 1000,
                                         defaults.population.carnivore_count, key="sr_carn")
        with col3:
            plants = st.number_input("Plants", 0, 5000, defaults.population.plant_count, key="sr_plants")
            obstacles = st.number_input("Obstacles", 0, 5000,
                                        defaults.population.obstacle_count, key="sr_obst")
            save_output = st.checkbox("Save run output", value=False, key="sr_save")

        if st.button("🚀 New Simulation", key="sr_start"):
            config = defaults.copy()
            config.world.width = int(width)
            config.world.height = int(height)
            config.world.seed = int(seed)
            config.population.herbivore_count = int(herbivores)
            config.population.carnivore_count = int(carnivores)
            config.population.plant_count = int(plants)
            config.population.obstacle_count = int(obstacles)
            errors = config.validate()
            if errors:
                st.error("\n".join(errors))
            else:
                _start(config, save_output)

    sim = st.session_state.sim
    if sim is None:
        st.info("Set up a simulation and press **New Simulation**.")
        return

    btn1, btn2, btn3 = st.columns(3)
    with btn1:
        if st.button("⏭️ Step", disabled=sim.is_collapsed, key="sr_step"):
            _advance(1)
    with btn2:
        many = st.number_input("Turns", 1, 10_000, 10, key="sr_many", label_visibility="collapsed")
    with btn3:
        if st.button("⏩ Run turns", disabled=sim.is_collapsed, key="sr_run"):
            _advance(int(many))

    _display(sim, st.session_state.sim_metrics)


def _display(sim: Simulation, metrics: MetricsCollector) -> None:
    state = sim.state

    kpi_cols = st.columns(4)
    kpi_cols[0].metric("🔄 Turn", state.turn)
    kpi_cols[1].metric("🌿 Herbivores", state.herbivore_count)
    kpi_cols[2].metric("🐺 Carnivores", state.carnivore_count)
    kpi_cols[3].metric("🌱 Plants", state.plant_count)

    if sim.is_collapsed:
        st.error(f"💀 All animals died! Ecosystem collapsed at turn {state.turn}.")

    grid_col, side_col = st.columns([3, 2])
    with grid_col:
        st.plotly_chart(render_state_grid(state), use_container_width=True)
    with side_col:
        st.subheader("Events")
        if state.events:
            st.markdown("\n".join(f"- {e.message}" for e in state.events))
        else:
            st.caption("No turn taken yet.")

    df = pd.DataFrame(metrics.history)
    if not df.empty:
        tab_pop, tab_flow, tab_energy, tab_raw = st.tabs(
            ["Population", "Births & Deaths", "Energy", "Raw Data"]
        )
        with tab_pop:
            st.plotly_chart(population_over_time(df), use_container_width=True)
        with tab_flow:
            st.plotly_chart(births_and_deaths(df), use_container_width=True)
        with tab_energy:
            st.plotly_chart(energy_distribution([a.energy for a in state.animals]),
                            use_container_width=True)
        with tab_raw:
            st.dataframe(df, use_container_width=True)
            st.download_button(
                "⬇️ Download CSV",
                data=df.to_csv(index=False),
                file_name="simulation_kpis.csv",
                mime="text/csv",
                key="sr_dl_csv",
            )
