"""CLI: interactive weather dashboard, or a one-shot lookup."""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.prompt import Prompt

from .config import Settings, load_settings
from .controller import DashboardController
from .exceptions import ConfigError
from .insight.gemini import InsightGenerator
from .location import LocationResolver, position_source_from_settings
from .log_setup import setup_logger
from .ui.dashboard import DashboardView
from .weather.openweather import OpenWeatherClient

QUIT_COMMANDS = {"/quit", "/exit", "/q"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse dashboard CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Current weather from OpenWeather with optional Gemini commentary."
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--city", type=str, default=None, help="Look up a city once and exit.")
    target.add_argument(
        "--here",
        action="store_true",
        help="Look up the configured current position once and exit.",
    )
    parser.add_argument(
        "--insight",
        action="store_true",
        help="Also request AI commentary after a successful one-shot lookup.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override LOG_LEVEL.",
    )
    return parser.parse_args(argv)


def build_controller(
    settings: Settings,
    logger: logging.Logger,
    weather_client: OpenWeatherClient,
    view: DashboardView | None = None,
) -> DashboardController:
    return DashboardController(
        weather_client=weather_client,
        weather_api_key=settings.openweather_api_key,
        insight_generator=InsightGenerator.from_settings(settings, logger),
        resolver=LocationResolver(position_source_from_settings(settings), logger),
        logger=logger,
        on_change=view.render if view is not None else None,
    )


def _run_one_shot(
    args: argparse.Namespace,
    controller: DashboardController,
    view: DashboardView,
) -> int:
    if args.here:
        state = controller.use_current_location()
    else:
        state = controller.search_city(args.city)
        if state.weather is None and state.error is None:
            view.console.print("City name must not be empty.")
            return 4

    if state.weather is not None and args.insight:
        state = controller.request_insight()

    view.render(state)
    return 0 if state.weather is not None else 4


def _run_interactive(controller: DashboardController, view: DashboardView) -> int:
    view.render(controller.state)
    while True:
        try:
            line = Prompt.ask(
                "[bold cyan]city[/bold cyan]",
                console=view.console,
                default="",
                show_default=False,
            )
        except (EOFError, KeyboardInterrupt):
            view.console.print()
            return 0

        command = line.strip()
        if command.lower() in QUIT_COMMANDS:
            return 0
        if command.lower() == "/here":
            if not controller.state.loading:
                controller.use_current_location()
        elif command.lower() == "/insight":
            if controller.state.weather is None:
                view.console.print("Look up a city first.")
            elif controller.state.can_request_insight:
                controller.request_insight()
            else:
                view.render(controller.state)
        else:
            # Blank input changes nothing.
            controller.search_city(command)


def main(argv: list[str] | None = None) -> int:
    """Run the dashboard."""
    args = parse_args(argv)
    console = Console()
    logger = setup_logger()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2

    logger.setLevel(args.log_level or settings.log_level)
    logger.debug("Settings loaded: %s", settings.safe_summary())

    view = DashboardView(
        console=console,
        icon_url_template=settings.openweather_icon_url_template,
        insight_enabled=bool(settings.gemini_api_key),
    )
    if not settings.openweather_api_key:
        view.render_configuration_error("OPENWEATHER_API_KEY")
        return 2

    one_shot = args.city is not None or args.here
    try:
        with OpenWeatherClient(settings=settings, logger=logger) as weather_client:
            if one_shot:
                controller = build_controller(settings, logger, weather_client)
                return _run_one_shot(args, controller, view)
            controller = build_controller(settings, logger, weather_client, view=view)
            return _run_interactive(controller, view)
    except Exception as exc:  # pragma: no cover - defensive catch for CLI runtime
        logger.exception("Unexpected dashboard failure: %s", exc)
        return 99


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
