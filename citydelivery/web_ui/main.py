"""NiceGUI entrypoint for the city delivery ranking page."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Callable, Optional, Sequence

from nicegui import ui

from citydelivery.domain.models import DateRange
from citydelivery.utils import logging as logging_utils
from citydelivery.viewmodels.settings_vm import SettingsVM
from citydelivery.web_ui.runtime import CityDeliveryRuntime, load_settings, save_settings
from citydelivery.web_ui.viewmodels import PickerSync, picker_value_for


LOGGER = logging.getLogger(__name__)


def _install_theme() -> None:
    """Install page CSS tokens."""
    ui.add_head_html(
        """
<style>
:root {
  --cd-bg: #f3f4f6;
  --cd-card: #ffffff;
  --cd-accent: #2563eb;
  --cd-accent-soft: #dbeafe;
  --cd-accent-ink: #1e40af;
}
body { background: var(--cd-bg); }
.cd-page {
  max-width: 56rem;
  margin: 0 auto;
  padding: 16px;
}
.cd-shell {
  background: var(--cd-card);
  border-radius: 10px;
  box-shadow: 0 10px 15px -3px rgba(0, 0, 0, 0.1);
  overflow: hidden;
}
.cd-header {
  background: var(--cd-accent);
  color: white;
  padding: 24px;
}
.cd-row {
  background: #f9fafb;
  border-radius: 10px;
  transition: box-shadow 300ms ease-in-out;
}
.cd-row:hover { box-shadow: 0 4px 6px -1px rgba(0, 0, 0, 0.1); }
.cd-badge {
  background: var(--cd-accent-soft) !important;
  color: var(--cd-accent-ink) !important;
  border-radius: 9999px;
  padding: 2px 10px;
}
</style>
        """
    )


def _notify_error(exc: Exception) -> None:
    """Render exceptions as concise NiceGUI toasts."""
    ui.notify(str(exc), color="negative", close_button="OK")


def _build_ui(settings_vm: SettingsVM) -> None:
    """Register the NiceGUI page."""

    @ui.page("/")
    def index() -> None:
        _install_theme()
        runtime = CityDeliveryRuntime(settings_vm)

        @ui.refreshable
        def render_range_label() -> None:
            ui.label(runtime.range_vm.label).classes("text-caption text-grey-7")

        @ui.refreshable
        def render_results() -> None:
            view = runtime.result_view()
            if view.kind == "loading":
                with ui.row().classes("items-center q-gutter-sm"):
                    ui.spinner(size="md")
                    ui.label("Loading...").classes("text-grey-7")
                return
            if view.kind == "error":
                ui.label(view.message).classes("text-negative")
                return
            with ui.column().classes("w-full q-gutter-md"):
                for row in view.rows:
                    with ui.card().classes("cd-row w-full q-pa-md").props("flat"):
                        with ui.row().classes("w-full justify-between items-center no-wrap"):
                            with ui.row().classes("items-center q-gutter-sm no-wrap"):
                                ui.label(f"#{row.rank}").classes("text-caption text-grey-6")
                                ui.label(row.city).classes("text-h6 text-primary")
                            ui.label(row.badge).classes("cd-badge text-caption text-weight-medium")

        def _invoke(action: Callable[[], Any]) -> None:
            try:
                action()
            except Exception as exc:
                LOGGER.exception("UI action failed")
                _notify_error(exc)

        picker_sync = PickerSync(lambda date_range: _invoke(lambda: runtime.set_range(date_range)))

        def on_range_changed(date_range: DateRange) -> None:
            picker_sync.push(date_range)
            render_range_label.refresh()

        def on_preset(label: str) -> None:
            _invoke(lambda: runtime.select_preset(label))

        runtime.on_range_changed = on_range_changed
        runtime.on_results_changed = render_results.refresh

        with ui.column().classes("cd-page w-full"):
            with ui.column().classes("cd-shell w-full gap-0"):
                with ui.element("header").classes("cd-header w-full"):
                    ui.label("City Delivery App").classes("text-h4 text-weight-bold")
                with ui.column().classes("w-full q-pa-lg q-gutter-lg"):
                    with ui.column().classes("w-full"):
                        ui.label("Select Date Range").classes("text-h6 text-weight-medium")
                        with ui.row().classes("w-full items-start q-gutter-md"):
                            picker_sync.widget = ui.date(
                                value=picker_value_for(runtime.date_range),
                                on_change=lambda event: picker_sync.on_change(event.value),
                            ).props("range")
                            with ui.column().classes("q-gutter-sm"):
                                render_range_label()
                                with ui.row().classes("q-gutter-sm"):
                                    for preset in runtime.presets():
                                        ui.button(
                                            preset.label,
                                            on_click=lambda _, label=preset.label: on_preset(label),
                                        ).props("dense unelevated no-caps").classes("cd-badge")
                    with ui.column().classes("w-full"):
                        ui.label("Cities Ranked by Deliveries").classes("text-h6 text-weight-medium")
                        render_results()

        runtime.start()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the city delivery NiceGUI page.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--endpoint", default=None, help="Override the deliveries endpoint URL.")
    parser.add_argument(
        "--settings-dir",
        default=None,
        help="Directory holding user_settings.json.",
    )
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Write the effective settings back to --settings-dir.",
    )
    parser.add_argument("--smoke-test", action="store_true")
    args = parser.parse_args(argv)
    if args.save_settings and not args.settings_dir:
        parser.error("--save-settings requires --settings-dir")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args(argv)
    settings_vm = load_settings(args.settings_dir)
    if args.endpoint:
        settings_vm.endpoint_url = args.endpoint
    if args.debug:
        settings_vm.debug_logging = True
    logging_utils.configure_root(debug=settings_vm.debug_logging)
    if args.save_settings:
        save_settings(settings_vm, args.settings_dir)
    if args.smoke_test:
        print("web-smoke-ok", json.dumps(settings_vm.to_dict(), sort_keys=True))
        return
    LOGGER.info("Serving deliveries from %s", settings_vm.endpoint_url)
    _build_ui(settings_vm)
    ui.run(
        host=args.host,
        port=args.port,
        title="City Delivery App",
        reload=args.reload,
        show=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
