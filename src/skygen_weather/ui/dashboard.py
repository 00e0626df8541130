"""Rich-rendered single-screen weather dashboard."""

from __future__ import annotations

import math
from datetime import date

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import DEFAULT_ICON_URL_TEMPLATE
from ..models import InsightResult, WeatherSnapshot
from ..state import DashboardState

APP_TITLE = "SkyGen Weather"
FOOTER = "Powered by OpenWeather & Google Gemini"
EMPTY_STATE = "Search for a city or use your location to see the forecast."
COMMAND_HINT = "Type a city name, /here for your location, /insight for AI commentary, /quit to exit."


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class DashboardView:
    """Turns a DashboardState into panels; holds no state of its own."""

    def __init__(
        self,
        *,
        console: Console,
        icon_url_template: str = DEFAULT_ICON_URL_TEMPLATE,
        insight_enabled: bool = True,
    ) -> None:
        self.console = console
        self.icon_url_template = icon_url_template
        self.insight_enabled = insight_enabled

    def render(self, state: DashboardState) -> None:
        self.console.print(self.build(state))

    def build(self, state: DashboardState, *, today: date | None = None) -> RenderableType:
        parts: list[RenderableType] = [self._build_header(state)]
        if state.error:
            parts.append(Panel(Text(state.error, style="red"), border_style="red"))
        if state.weather is not None:
            parts.append(self._build_weather_panel(state.weather, today=today or date.today()))
            parts.append(self._build_insight_panel(state))
        elif not state.loading and not state.error:
            parts.append(Panel(Text(EMPTY_STATE, style="dim"), border_style="bright_black"))
        parts.append(Text(FOOTER, style="dim", justify="center"))
        return Group(*parts)

    def render_configuration_error(self, missing_key: str = "OPENWEATHER_API_KEY") -> None:
        body = Text()
        body.append("Configuration Error\n\n", style="bold red")
        body.append(f"The {missing_key} environment variable is missing.\n\n")
        body.append(f"1. Add {missing_key} to your environment or .env file\n", style="dim")
        body.append("2. Restart skygen-weather", style="dim")
        self.console.print(Panel(body, border_style="red", title=APP_TITLE))

    def _build_header(self, state: DashboardState) -> Panel:
        text = Text()
        text.append(APP_TITLE, style="bold bright_cyan")
        if state.city:
            text.append("  |  ")
            text.append(f"city={state.city}", style="cyan")
        if state.loading:
            text.append("  ")
            text.append("loading...", style="yellow")
        text.append("\n")
        text.append(COMMAND_HINT, style="dim")
        return Panel(text, border_style="blue")

    def _build_weather_panel(self, snapshot: WeatherSnapshot, *, today: date) -> Panel:
        headline = Text()
        headline.append(snapshot.name, style="bold white")
        if snapshot.country:
            headline.append(", ")
            headline.append(snapshot.country, style="bright_black")
        headline.append("\n")
        headline.append(f"{today:%A, %B} {today.day}, {today.year}", style="dim")
        headline.append("\n\n")
        headline.append(f"{round_half_up(snapshot.temperature)}°", style="bold white")
        headline.append("  ")
        headline.append(snapshot.condition.description.capitalize(), style="bright_cyan")
        headline.append("\n")
        headline.append(self.icon_url(snapshot), style="dim underline")

        metrics = Table.grid(expand=True, padding=(0, 2))
        metrics.add_column(justify="center")
        metrics.add_column(justify="center")
        metrics.add_column(justify="center")
        metrics.add_row(
            f"{round_half_up(snapshot.wind_speed)}",
            f"{snapshot.humidity:g}",
            f"{round_half_up(snapshot.feels_like)}°",
        )
        metrics.add_row(
            Text("M/S WIND", style="dim"),
            Text("% HUMIDITY", style="dim"),
            Text("FEELS LIKE", style="dim"),
        )
        return Panel(Group(headline, Text(""), metrics), title="Current Weather", border_style="cyan")

    def _build_insight_panel(self, state: DashboardState) -> Panel:
        if state.insight is not None:
            return self._build_insight_result(state.insight)
        if not self.insight_enabled:
            body = Text("AI insight unavailable: GEMINI_API_KEY is not set.", style="dim")
        elif state.insight_loading:
            body = Text("Consulting Gemini...", style="magenta")
        else:
            body = Text("Get AI Insight: type /insight", style="magenta")
        return Panel(body, title="AI Insight", border_style="magenta")

    @staticmethod
    def _build_insight_result(insight: InsightResult) -> Panel:
        table = Table.grid(padding=(0, 1))
        table.add_column(style="bright_black", min_width=6)
        table.add_column()
        table.add_row("", Text(f'"{insight.summary}"', style="italic"))
        table.add_row("Wear:", Text(insight.outfit_advice, style="bright_cyan"))
        table.add_row("Fact:", Text(insight.fun_fact, style="magenta"))
        return Panel(table, title="Gemini Analysis", border_style="magenta")

    def icon_url(self, snapshot: WeatherSnapshot) -> str:
        return self.icon_url_template.format(icon=snapshot.condition.icon)
