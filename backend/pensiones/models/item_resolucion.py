from pensiones.extensions import db
from pensiones.models.catalogos import TipoItem


class ItemResolucion(db.Model):
    __tablename__ = "items_resolucion"

    id_item_resolucion = db.Column(db.Integer, primary_key=True, autoincrement=True)

    resolucion_id = db.Column(
        db.Integer,
        db.ForeignKey("resoluciones.id_resolucion", ondelete="CASCADE"),
        nullable=False,
    )
    tipo_item_id = db.Column(
        db.Integer,
        db.ForeignKey("tipos_item_resolucion.id_tipo_item", ondelete="RESTRICT"),
        nullable=False,
    )

    # Retroactivo: total acumulado del pago único.
    # Consecutivo: importe unitario de una cuota.
    importe = db.Column(db.Numeric(10, 2), nullable=False)

    cantidad_cuotas = db.Column(db.Integer, nullable=False)

    # Cuotas consumidas (0 <= cuota_actual_item <= cantidad_cuotas)
    cuota_actual_item = db.Column(db.Integer, nullable=True)

    resolucion = db.relationship("Resolucion", back_populates="items")
    tipo = db.relationship("TipoItemResolucion", lazy="joined")

    __table_args__ = (
        db.CheckConstraint("cantidad_cuotas >= 1", name="ck_items_resolucion_cantidad"),
        db.CheckConstraint(
            "cuota_actual_item IS NULL OR (cuota_actual_item >= 0 AND cuota_actual_item <= cantidad_cuotas)",
            name="ck_items_resolucion_progreso",
        ),
    )

    @property
    def tipo_item(self) -> TipoItem:
        return TipoItem(self.tipo_item_id)

    @property
    def agotado(self) -> bool:
        return (self.cuota_actual_item or 0) >= self.cantidad_cuotas

    def __repr__(self) -> str:
        return (
            f"<ItemResolucion id={self.id_item_resolucion} tipo={self.tipo_item_id} "
            f"cuota={self.cuota_actual_item}/{self.cantidad_cuotas}>"
        )
