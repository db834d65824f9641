import argparse
import logging
import sys
from pathlib import Path
from src.white_noise_player.config.settings import create_example_env_file, load_config, setup_logging
from src.white_noise_player.core.player import WhiteNoisePlayer
from src.white_noise_player.core.surface import InputSurface


def create_surface(kind: str, player: WhiteNoisePlayer, config) -> InputSurface:
    settle_s = config.stop_settle_ms / 1000
    if kind == "gui":
        from src.white_noise_player.ui.gui import WindowSurface
        return WindowSurface(player.control, player.wait_finished, quit_settle_s=settle_s)
    if kind == "tui":
        from src.white_noise_player.ui.tui import TerminalSurface
        return TerminalSurface(player.control, player.wait_finished, quit_settle_s=settle_s)
    from src.white_noise_player.ui.cli import ConsoleSurface
    return ConsoleSurface(
        player.control,
        player.wait_finished,
        pacing_s=config.input_pacing_ms / 1000,
        shutdown_settle_s=config.shutdown_settle_ms / 1000,
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Looping white noise player")
    parser.add_argument("--config", type=str, help="Path to config file", default=".env")
    parser.add_argument("--ui", choices=["cli", "gui", "tui"], default="cli", help="Input surface to run")
    parser.add_argument("--sample", type=str, help="Path to the looping sample (overrides SAMPLE_PATH)")
    parser.add_argument("--create-config", action="store_true", help="Create example config file")

    args = parser.parse_args(argv)

    if args.create_config:
        create_example_env_file()
        print("Example configuration file created at .env.example")
        print("Copy it to .env and adjust as needed.")
        return 0

    try:
        config = load_config(Path(args.config))
    except ValueError as e:
        print(f"Configuration error: {e}")
        print("Please check your configuration file.")
        return 2

    if args.sample:
        config = config.model_copy(update={"sample_path": Path(args.sample)})

    console_handler = None
    if args.ui == "tui":
        from textual.logging import TextualHandler
        console_handler = TextualHandler()
    setup_logging(config.log_level, config.log_dir, config.log_retention_days, console_handler)

    player = WhiteNoisePlayer(config)
    surface = create_surface(args.ui, player, config)
    player.start()
    try:
        return surface.run()
    except KeyboardInterrupt:
        player.runtime.shutdown_signal.stop("keyboard interrupt")
        print("\nGoodbye!")
        return 0
    finally:
        player.stop(timeout=(config.stop_tween_ms + config.stop_settle_ms) / 1000 + 1.0)
        logging.shutdown()


if __name__ == "__main__":
    sys.exit(main())
