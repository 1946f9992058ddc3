from decimal import Decimal
from types import SimpleNamespace

import pytest

from pensiones.models.catalogos import TipoItem
from pensiones.services.tarifa_service import (
	calcular_importe_item,
	calcular_importe_total,
	desglose_cuotas,
	obtener_valores_cuota_por_anio,
)
from pensiones.utils.errors import ValorCuotaNoConfigurado


VALORES = {2023: Decimal("100"), 2024: Decimal("110"), 2025: Decimal("121.50")}


def test_retroactivo_suma_cada_cuota_con_su_anio():
	# Ancla feb-2024: nov-2023, dic-2023, ene-2024
	importe = calcular_importe_item(TipoItem.RETROACTIVO, 3, 0, 2024, 2, 3, VALORES)
	assert importe == Decimal("310.00")


def test_retroactivo_de_dic_a_feb():
	# Ancla mar-2024: dic-2023, ene-2024, feb-2024
	cuotas = desglose_cuotas(TipoItem.RETROACTIVO, 3, 0, 2024, 3, 3, VALORES)
	assert [(c["anio"], c["mes"]) for c in cuotas] == [(2023, 12), (2024, 1), (2024, 2)]
	assert calcular_importe_item(TipoItem.RETROACTIVO, 3, 0, 2024, 3, 3, VALORES) == Decimal("320.00")


def test_consecutivo_guarda_importe_unitario_de_su_primera_cuota():
	importe = calcular_importe_item(TipoItem.CONSECUTIVO, 6, 0, 2024, 3, 3, VALORES)
	assert importe == Decimal("110.00")

	# Independiente de la cantidad de cuotas
	assert calcular_importe_item(TipoItem.CONSECUTIVO, 1, 0, 2024, 3, 0, VALORES) == Decimal("110.00")


def test_consecutivo_con_progreso_previo_se_ubica_mas_adelante():
	# Ancla nov-2024, cuota actual 3 -> primera cuota valuada en ene-2025
	importe = calcular_importe_item(TipoItem.CONSECUTIVO, 2, 2, 2024, 11, 0, VALORES)
	assert importe == Decimal("121.50")


def test_anio_faltante_es_error():
	with pytest.raises(ValorCuotaNoConfigurado) as exc:
		# Ancla dic-2025, 2 cuotas -> ene-2026 sin valor
		calcular_importe_item(TipoItem.CONSECUTIVO, 2, 0, 2025, 12, 0, VALORES)
	assert exc.value.anio == 2026
	assert exc.value.status_code == 400


def test_total_multiplica_solo_consecutivos():
	items = [
		SimpleNamespace(tipo_item_id=1, importe=Decimal("310.00"), cantidad_cuotas=3),
		SimpleNamespace(tipo_item_id=2, importe=Decimal("110.00"), cantidad_cuotas=4),
	]
	assert calcular_importe_total(items) == Decimal("750.00")


def test_redondeo_a_centavos():
	valores = {2024: Decimal("33.335")}
	assert calcular_importe_item(TipoItem.RETROACTIVO, 1, 0, 2024, 6, 1, valores) == Decimal("33.34")


def test_obtener_valores_desde_bd(make_valores_cuota):
	make_valores_cuota({2023: 100, 2024: 110})
	valores = obtener_valores_cuota_por_anio()
	assert valores == {2023: Decimal("100"), 2024: Decimal("110")}
