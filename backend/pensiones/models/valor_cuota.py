from pensiones.extensions import db


class ValorCuota(db.Model):
    """Precio unitario de una cuota para un año calendario."""

    __tablename__ = "valor_cuotas"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    anio = db.Column(db.Integer, unique=True, nullable=False)
    importe = db.Column(db.Numeric(10, 2), nullable=False)

    def __repr__(self) -> str:
        return f"<ValorCuota anio={self.anio} importe={self.importe}>"
