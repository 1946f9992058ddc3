from pensiones.extensions import db


class Paciente(db.Model):
    __tablename__ = "pacientes"

    id_paciente = db.Column(db.Integer, primary_key=True, autoincrement=True)
    documento = db.Column(db.String(20), unique=True, nullable=False)
    nombre1 = db.Column(db.String(100), nullable=False)
    apellido1 = db.Column(db.String(100), nullable=False)

    expedientes = db.relationship("Expediente", back_populates="paciente")

    def __repr__(self) -> str:
        return f"<Paciente id={self.id_paciente} documento={self.documento}>"
