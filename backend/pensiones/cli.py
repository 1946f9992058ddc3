"""
Comandos de consola (Flask CLI):

    flask resoluciones avanzar-cuotas [--dry-run]
    flask catalogos seed
"""

import click
from flask.cli import AppGroup

from pensiones.services.avance_cuotas_service import avanzar_cuotas_mensuales
from pensiones.services.catalogo_service import sembrar_catalogos


resoluciones_cli = AppGroup("resoluciones", help="Tareas programadas de resoluciones.")
catalogos_cli = AppGroup("catalogos", help="Datos de referencia.")


@resoluciones_cli.command("avanzar-cuotas")
@click.option("--dry-run", is_flag=True, help="Calcula el avance sin guardar cambios.")
def avanzar_cuotas(dry_run: bool):
    """Avanza una cuota de los ítems consecutivos (ejecutar una vez por mes)."""
    resultado = avanzar_cuotas_mensuales(dry_run=dry_run)
    prefijo = "[DRY RUN] " if dry_run else ""
    click.echo(
        f"{prefijo}{resultado['items_actualizados']} ítems actualizados, "
        f"{resultado['resoluciones_finalizadas']} resoluciones finalizadas."
    )


@catalogos_cli.command("seed")
def seed_catalogos():
    creados = sembrar_catalogos()
    click.echo(
        f"Catálogos listos: {creados['estados_resolucion']} estados, "
        f"{creados['tipos_item_resolucion']} tipos de ítem creados."
    )


def register_cli(app):
    app.cli.add_command(resoluciones_cli)
    app.cli.add_command(catalogos_cli)
