"""
Predator-Prey Grid — CLI Entry Point

Usage:
    python main.py --mode single
    python main.py --mode single --config config/default_config.json --seed 7
    python main.py --mode single --headless --turns 500 --output runs
    python main.py --ui
"""

import argparse
import sys
import time
from pathlib import Path


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Predator-Prey Grid — turn-based herbivore/carnivore ecosystem",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --ui                                   Launch Streamlit UI
  python main.py --mode single                          Watch a run in the console
  python main.py --mode single --headless --turns 200   Run without rendering
        """,
    )

    parser.add_argument(
        "--mode",
        choices=["single"],
        default=None,
        help="Run mode: 'single' for one simulation",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to JSON config file (default: built-in defaults)",
    )
    parser.add_argument(
        "--ui",
        action="store_true",
        help="Launch Streamlit web UI (ignores --mode and --config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override random seed (overrides config value)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Force headless mode (no console rendering, no pacing)",
    )
    parser.add_argument(
        "--turns",
        type=int,
        default=None,
        help="Stop after this many turns even if animals are still alive",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to pause between rendered turns",
    )
    parser.add_argument(
        "--no-wait",
        action="store_true",
        help="Do not wait for Enter before the first turn",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write metrics, events and summary under this directory",
    )

    return parser.parse_args()


def launch_ui() -> None:
    """Launch the Streamlit web UI."""
    import subprocess
    ui_path = Path(__file__).parent / "ecosim" / "ui" / "app.py"
    if not ui_path.exists():
        print(f"Error: UI app not found at {ui_path}")
        sys.exit(1)
    subprocess.run(
        [
            sys.executable, "-m", "streamlit", "run", str(ui_path),
            "--server.port=8501",
            "--server.headless=true",
            "--browser.gatherUsageStats=false",
        ],
        check=True,
    )


def run_single(config_path: str | None, seed_override: int | None = None,
               headless: bool = False, max_turns: int | None = None,
               delay: float | None = None, no_wait: bool = False,
               output_dir: str | None = None) -> None:
    """Run a single simulation, rendering each turn unless headless."""
    from rich.console import Console

    from ecosim.core.config import get_default_config, load_config
    from ecosim.logging.run_manager import RunManager
    from ecosim.simulation.driver import Simulation
    from ecosim.simulation.metrics import MetricsCollector
    from ecosim.ui.components.console_view import (
        print_collapse_banner,
        print_legend,
        print_state,
    )

    config = load_config(config_path) if config_path else get_default_config()

    if seed_override is not None:
        config.world.seed = seed_override
    if headless:
        config.viz.mode = "headless"
    if max_turns is not None:
        config.run.max_turns = max_turns
    if delay is not None:
        config.viz.turn_delay_seconds = delay
    if no_wait:
        config.viz.wait_for_key = False

    rendering = config.viz.mode == "console"
    console = Console()

    pop = config.population
    print(f"[Predator-Prey Grid] Single run")
    print(f"  Config: {config_path or '(defaults)'}")
    print(f"  Grid: {config.world.width}x{config.world.height}")
    print(f"  Herbivores: {pop.herbivore_count}  Carnivores: {pop.carnivore_count}  "
          f"Plants: {pop.plant_count}  Obstacles: {pop.obstacle_count}")
    print(f"  Seed: {config.world.seed}")
    print(f"  Max Turns: {config.run.max_turns or 'until collapse'}")
    if output_dir:
        print(f"  Output: {output_dir}")
    print()

    sim = Simulation(config)
    metrics = MetricsCollector()
    run_manager = RunManager(config, base_dir=output_dir) if output_dir else None
    snapshot_every = config.viz.snapshot_every_n_turns

    def record(events=()) -> None:
        kpis = metrics.collect(sim.state)
        if run_manager is None:
            return
        run_manager.log_turn(kpis, events)
        if snapshot_every and sim.state.turn % snapshot_every == 0:
            run_manager.save_snapshot(sim.state)

    record()

    if rendering:
        print_legend(console)
        print_state(sim.state, console)
        if config.viz.wait_for_key:
            console.input("\nPress Enter to start simulation...")

    start_time = time.time()

    def on_turn(turn: int, s: Simulation) -> None:
        record(s.state.events)
        if rendering:
            print_state(s.state, console)
            if not s.is_collapsed and config.viz.turn_delay_seconds > 0:
                time.sleep(config.viz.turn_delay_seconds)
        elif turn % 50 == 0 or s.is_collapsed:
            print(f"  Turn {turn:5d} | Herbivores: {s.state.herbivore_count:4d} | "
                  f"Carnivores: {s.state.carnivore_count:4d} | Plants: {s.state.plant_count:4d}")

    sim.on_turn = on_turn

    try:
        result = sim.run()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        result = sim.run(max_turns=0)

    elapsed = time.time() - start_time

    if result.collapsed:
        print_collapse_banner(console)

    print()
    print(f"[Result]")
    print(f"  Turns: {sim.current_turn}")
    print(f"  Final herbivores: {result.final_herbivores}")
    print(f"  Final carnivores: {result.final_carnivores}")
    print(f"  Final plants: {result.final_plants}")
    print(f"  Collapsed: {result.collapsed}")
    print(f"  Elapsed: {elapsed:.1f}s")

    if run_manager is not None:
        summary = result.to_dict()
        summary["total_turns"] = sim.current_turn
        summary["elapsed_seconds"] = round(elapsed, 2)
        run_manager.finalize(summary)
        print(f"  Output saved to: {run_manager.run_dir}")

    if rendering and config.viz.wait_for_key:
        console.input("\nPress Enter to exit...")


def main() -> None:
    args = parse_args()

    if args.ui:
        launch_ui()
        return

    if args.mode is None:
        print("Error: Specify --mode single or --ui to launch the web interface.")
        print("Run with --help for usage information.")
        sys.exit(1)

    if args.mode == "single":
        run_single(
            args.config,
            seed_override=args.seed,
            headless=args.headless,
            max_turns=args.turns,
            delay=args.delay,
            no_wait=args.no_wait,
            output_dir=args.output,
        )


if __name__ == "__main__":
    main()
