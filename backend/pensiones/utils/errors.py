from flask import jsonify
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError


class ApiError(Exception):
    """
    Excepción genérica para errores de negocio.
    """
    def __init__(self, message, status_code=400, errors=None, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}
        self.payload = payload or {}


class ExpedienteNoEncontrado(ApiError):
    def __init__(self, expediente_id):
        super().__init__(
            f"No se encontró el expediente {expediente_id}.",
            404,
            payload={"code": "EXPEDIENTE_NO_ENCONTRADO", "expediente_id": expediente_id},
        )
        self.expediente_id = expediente_id


class LimiteCuotasNoDefinido(ApiError):
    def __init__(self, expediente_id):
        super().__init__(
            f"La especificación del expediente {expediente_id} no define un límite de cuotas.",
            400,
            payload={"code": "LIMITE_CUOTAS_NO_DEFINIDO", "expediente_id": expediente_id},
        )
        self.expediente_id = expediente_id


class ValorCuotaNoConfigurado(ApiError):
    """No existe precio en la tabla valor_cuotas para el año de una cuota."""

    def __init__(self, anio):
        super().__init__(
            f"Falta configurar el Valor Cuota para el año {anio}.",
            400,
            payload={"code": "VALOR_CUOTA_NO_CONFIGURADO", "anio": anio},
        )
        self.anio = anio


class CupoCuotasExcedido(ApiError):
    def __init__(self, limite, asignadas, solicitadas):
        disponibles = limite - asignadas
        super().__init__(
            f"La suma de las cuotas solicitadas ({solicitadas}) excede el límite disponible "
            f"({disponibles}). Límite total: {limite}. Cuotas ya asignadas: {asignadas}.",
            400,
            payload={
                "code": "CUPO_CUOTAS_EXCEDIDO",
                "limite": limite,
                "asignadas": asignadas,
                "solicitadas": solicitadas,
            },
        )
        self.limite = limite
        self.asignadas = asignadas
        self.solicitadas = solicitadas


class TipoItemInvalido(ApiError):
    def __init__(self, tipo_item_id):
        super().__init__(
            f"El tipo_item_id {tipo_item_id} no es válido.",
            400,
            payload={"code": "TIPO_ITEM_INVALIDO", "tipo_item_id": tipo_item_id},
        )


class SinCamposParaActualizar(ApiError):
    def __init__(self):
        super().__init__("No hay campos válidos de la resolución o ítems para actualizar.", 400)


class ResolucionNoEncontrada(ApiError):
    def __init__(self, id_resolucion):
        super().__init__(
            "Resolución no encontrada.",
            404,
            payload={"id_resolucion": id_resolucion},
        )


class ErrorTransaccion(ApiError):
    def __init__(self, message="Error al guardar los cambios en la base de datos."):
        super().__init__(message, 500)


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        response = {
            "success": False,
            "message": err.message,
        }
        if err.errors:
            response["errors"] = err.errors
        if getattr(err, "payload", None):
            response["payload"] = err.payload

        return jsonify(response), err.status_code

    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err: ValidationError):
        response = {
            "success": False,
            "message": "Datos inválidos",
            "errors": err.messages if hasattr(err, "messages") else str(err),
        }
        return jsonify(response), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        response = {
            "success": False,
            "message": err.description or "Error HTTP",
        }
        return jsonify(response), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Traza completa en la consola
        app.logger.exception(err)

        response = {
            "success": False,
            "message": "Error interno del servidor",
        }
        return jsonify(response), 500
