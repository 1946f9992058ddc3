from pensiones.extensions import db
from pensiones.models.catalogos import EstadoResolucionId


class Resolucion(db.Model):
    __tablename__ = "resoluciones"

    id_resolucion = db.Column(db.Integer, primary_key=True, autoincrement=True)
    fecha = db.Column(db.Date, nullable=False)
    descripcion = db.Column(db.String(500), nullable=True)

    estado_id = db.Column(
        db.Integer,
        db.ForeignKey("estados_resolucion.id_estado_resolucion", ondelete="RESTRICT"),
        nullable=False,
        default=int(EstadoResolucionId.ACTIVO),
    )
    expediente_id = db.Column(
        db.Integer,
        db.ForeignKey("expedientes.id_expediente", ondelete="CASCADE"),
        nullable=False,
    )

    # El importe total NO se guarda: se recalcula siempre desde los ítems.

    estado = db.relationship("EstadoResolucion", lazy="joined")
    expediente = db.relationship("Expediente", back_populates="resoluciones")

    items = db.relationship(
        "ItemResolucion",
        back_populates="resolucion",
        cascade="all, delete-orphan",
        order_by="ItemResolucion.id_item_resolucion",
    )

    @property
    def finalizada(self) -> bool:
        return self.estado_id == EstadoResolucionId.FINALIZADO

    def __repr__(self) -> str:
        return f"<Resolucion id={self.id_resolucion} expediente={self.expediente_id} estado={self.estado_id}>"
