"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. The runtime (registry, plugins, concepts) is built
lazily so ``--help`` and ``--version`` never load plugins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from littag.domain.errors import ConfigurationError
from littag.output.formatters import format_result

if TYPE_CHECKING:
    from littag.bootstrap import Runtime
    from littag.config.settings import LittagSettings
    from littag.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: LittagSettings) -> None:
        self.settings = settings
        self._runtime: Runtime | None = None

        from littag.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            redact_values=settings.redact_values,
        )

        if settings.verbose:
            from littag.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def runtime(self) -> Runtime:
        """The initialized runtime (built on first access).

        A configuration error aborts the command with exit code 1.
        """
        if self._runtime is None:
            from littag.bootstrap import build_runtime

            try:
                self._runtime = build_runtime(self.settings)
            except ConfigurationError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._runtime

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings (including initialization warnings) go to stderr.
        * Failure: writes to stderr, exits with code 1.
        """
        if self._runtime is not None and self._runtime.warnings:
            result = result.model_copy(
                update={"warnings": [*self._runtime.warnings, *result.warnings]}
            )
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
