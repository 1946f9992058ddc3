from .catalogos import EstadoResolucion, EstadoResolucionId, TipoItem, TipoItemResolucion
from .paciente import Paciente
from .especificacion import Especificacion
from .expediente import Expediente
from .valor_cuota import ValorCuota
from .resolucion import Resolucion
from .item_resolucion import ItemResolucion

__all__ = [
    "EstadoResolucion",
    "EstadoResolucionId",
    "TipoItem",
    "TipoItemResolucion",
    "Paciente",
    "Especificacion",
    "Expediente",
    "ValorCuota",
    "Resolucion",
    "ItemResolucion",
]
