from marshmallow import EXCLUDE, fields, pre_load, validates_schema, ValidationError, validate

from pensiones.extensions.ma import ma
from pensiones.models.catalogos import TipoItem


def _fecha_sin_hora(data):
    # "2024-03-01T00:00:00Z" -> "2024-03-01" para evitar desfases de zona horaria
    fecha = data.get("fecha") if isinstance(data, dict) else None
    if isinstance(fecha, str) and "T" in fecha:
        data = {**data, "fecha": fecha.split("T")[0]}
    return data


class ItemResolucionSchema(ma.Schema):
    """
    Un bloque de ítem dentro de la resolución.
    El importe enviado por el cliente se acepta pero se ignora: se calcula
    siempre con la tabla valor_cuotas.
    """

    class Meta:
        unknown = EXCLUDE

    id_item_resolucion = fields.Integer(required=False, allow_none=True, validate=validate.Range(min=1))
    tipo_item_id = fields.Integer(
        required=True,
        error_messages={"required": "El tipo de ítem es obligatorio para cada ítem de resolución."},
    )
    importe = fields.Decimal(
        required=False,
        allow_none=True,
        places=2,
        validate=validate.Range(min=0, error="El importe del ítem debe ser un número positivo."),
    )
    cantidad_cuotas = fields.Integer(
        required=True,
        validate=validate.Range(min=1, error="La cantidad de cuotas debe ser un número entero positivo."),
    )
    cuota_actual_item = fields.Integer(
        required=False,
        allow_none=True,
        validate=validate.Range(min=1, error="La cuota actual del ítem debe ser un número entero positivo (>= 1)."),
    )

    @validates_schema
    def validar_cuota_actual(self, data, **kwargs):
        if data.get("tipo_item_id") != TipoItem.CONSECUTIVO:
            return

        cuota_actual = data.get("cuota_actual_item")
        if cuota_actual is None:
            raise ValidationError(
                "La cuota actual (cuota_actual_item) es obligatoria para el ítem Consecutivo.",
                field_name="cuota_actual_item",
            )
        cantidad = data.get("cantidad_cuotas")
        if cantidad is not None and cuota_actual > cantidad:
            raise ValidationError(
                "La cuota actual no puede superar la cantidad de cuotas del ítem.",
                field_name="cuota_actual_item",
            )


class ResolucionCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    @pre_load
    def limpiar_fecha(self, data, **kwargs):
        return _fecha_sin_hora(data)

    fecha = fields.Date(
        required=True,
        error_messages={"required": "La fecha es obligatoria."},
    )
    descripcion = fields.String(
        required=False,
        allow_none=True,
        validate=validate.Length(max=500, error="La descripción no debe exceder los 500 caracteres."),
    )
    estado_id = fields.Integer(
        required=True,
        validate=validate.Range(min=1, error="El ID de estado debe ser un número entero positivo."),
        error_messages={"required": "El estado de la resolución es obligatorio."},
    )
    items_resolucion = fields.List(
        fields.Nested(ItemResolucionSchema),
        required=True,
        validate=validate.Length(min=1, error="La resolución debe tener al menos un ítem."),
    )


class ResolucionUpdateSchema(ma.Schema):
    """Todos los campos son opcionales; items_resolucion reemplaza el conjunto completo."""

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def limpiar_fecha(self, data, **kwargs):
        return _fecha_sin_hora(data)

    fecha = fields.Date(required=False)
    descripcion = fields.String(
        required=False,
        allow_none=True,
        validate=validate.Length(max=500, error="La descripción no debe exceder los 500 caracteres."),
    )
    estado_id = fields.Integer(
        required=False,
        validate=validate.Range(min=1, error="El ID de estado debe ser un número entero positivo."),
    )
    items_resolucion = fields.List(
        fields.Nested(ItemResolucionSchema),
        required=False,
        validate=validate.Length(min=1, error="El campo items_resolucion debe tener al menos un ítem."),
    )
