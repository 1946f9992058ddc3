from pensiones.extensions import db


class Especificacion(db.Model):
    __tablename__ = "especificaciones"

    id_especificacion = db.Column(db.Integer, primary_key=True, autoincrement=True)
    nombre = db.Column(db.String(120), nullable=False)

    # Tope de cuotas del expediente (sumando todas sus resoluciones)
    cantidad_cuotas = db.Column(db.Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Especificacion id={self.id_especificacion} cuotas={self.cantidad_cuotas}>"
