from pensiones.extensions import db


class Expediente(db.Model):
    __tablename__ = "expedientes"

    id_expediente = db.Column(db.Integer, primary_key=True, autoincrement=True)

    # Ancla (año, mes) de todo el cálculo de cuotas
    fecha_inicio = db.Column(db.Date, nullable=False)

    rnt = db.Column(db.String(50), nullable=True)
    caso_nuevo = db.Column(db.Boolean, default=True)
    observaciones = db.Column(db.Text, nullable=True)

    especificacion_id = db.Column(
        db.Integer,
        db.ForeignKey("especificaciones.id_especificacion", ondelete="RESTRICT"),
        nullable=True,
    )
    paciente_id = db.Column(
        db.Integer,
        db.ForeignKey("pacientes.id_paciente", ondelete="RESTRICT"),
        nullable=True,
    )

    especificacion = db.relationship("Especificacion", lazy="joined")
    paciente = db.relationship("Paciente", back_populates="expedientes")

    resoluciones = db.relationship(
        "Resolucion",
        back_populates="expediente",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Expediente id={self.id_expediente} inicio={self.fecha_inicio}>"
