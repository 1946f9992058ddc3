from flask import Blueprint, request

from pensiones.schemas.resolucion_schemas import ResolucionCreateSchema, ResolucionUpdateSchema
from pensiones.services import resolucion_service
from pensiones.utils.responses import success_response

bp = Blueprint("resoluciones", __name__)

resolucion_create_schema = ResolucionCreateSchema()
resolucion_update_schema = ResolucionUpdateSchema()


@bp.post("/expedientes/<int:expediente_id>/resoluciones")
def crear_resolucion(expediente_id: int):
    """
    Crea una resolución (con sus ítems) para el expediente.
    Body JSON:
    {
      "fecha": "2024-03-15",
      "descripcion": "Resolución inicial",
      "estado_id": 1,
      "items_resolucion": [
        {"tipo_item_id": 1, "cantidad_cuotas": 3},
        {"tipo_item_id": 2, "cantidad_cuotas": 9, "cuota_actual_item": 1}
      ]
    }
    """
    json_data = request.get_json() or {}
    data = resolucion_create_schema.load(json_data)
    resolucion = resolucion_service.crear_resolucion(expediente_id, data)

    return success_response(
        message="Resolución creada correctamente",
        data=resolucion,
        status_code=201,
    )


@bp.get("/expedientes/<int:expediente_id>/resoluciones")
def listar_resoluciones_expediente(expediente_id: int):
    items = resolucion_service.listar_resoluciones_expediente(expediente_id)
    return success_response(
        data={"items": items},
        message="OK",
        meta={"expediente_id": expediente_id, "total": len(items)},
    )


@bp.get("/resoluciones/<int:id_resolucion>")
def obtener_resolucion(id_resolucion: int):
    return success_response(data=resolucion_service.obtener_resolucion(id_resolucion), message="OK")


@bp.put("/resoluciones/<int:id_resolucion>")
def actualizar_resolucion(id_resolucion: int):
    """
    Actualiza fecha/estado/descripción y, si viene items_resolucion,
    reemplaza el conjunto de ítems (los que traen id_item_resolucion se
    actualizan, los nuevos se insertan y los omitidos se eliminan).
    """
    json_data = request.get_json() or {}
    data = resolucion_update_schema.load(json_data)
    resolucion = resolucion_service.actualizar_resolucion(id_resolucion, data)

    return success_response(message="Resolución actualizada correctamente", data=resolucion)


@bp.delete("/resoluciones/<int:id_resolucion>")
def eliminar_resolucion(id_resolucion: int):
    eliminada = resolucion_service.eliminar_resolucion(id_resolucion)
    return success_response(
        message="Resolución eliminada exitosamente",
        data={"deleted": eliminada},
    )
