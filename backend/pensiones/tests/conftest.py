from datetime import date
from decimal import Decimal

import pytest

from sqlalchemy.pool import StaticPool

from pensiones import create_app
from pensiones.config import TestConfig as BaseTestConfig
from pensiones.extensions import db

# Importar modelos para que SQLAlchemy registre mappers/tablas
import pensiones.models  # noqa: F401
from pensiones.models.especificacion import Especificacion
from pensiones.models.expediente import Expediente
from pensiones.models.paciente import Paciente
from pensiones.models.valor_cuota import ValorCuota
from pensiones.services.catalogo_service import sembrar_catalogos


class PytestConfig(BaseTestConfig):
	SQLALCHEMY_DATABASE_URI = "sqlite://"
	SQLALCHEMY_ENGINE_OPTIONS = {
		"connect_args": {"check_same_thread": False},
		"poolclass": StaticPool,
	}


@pytest.fixture(scope="session")
def app():
	app = create_app(PytestConfig)
	with app.app_context():
		db.create_all()
		yield app
		db.session.remove()
		db.drop_all()


@pytest.fixture()
def client(app):
	return app.test_client()


@pytest.fixture()
def db_session(app):
	with app.app_context():
		yield db.session
		db.session.rollback()


@pytest.fixture(autouse=True)
def _limpiar_tablas(app):
	yield
	db.session.rollback()
	for table in reversed(db.metadata.sorted_tables):
		db.session.execute(table.delete())
	db.session.commit()


@pytest.fixture()
def catalogos(db_session):
	sembrar_catalogos()


@pytest.fixture()
def make_valores_cuota(db_session):
	def _make_valores_cuota(valores: dict[int, float]):
		for anio, importe in valores.items():
			db_session.add(ValorCuota(anio=anio, importe=Decimal(str(importe))))
		db_session.commit()

	return _make_valores_cuota


@pytest.fixture()
def make_expediente(db_session):
	contador = {"n": 0}

	def _make_expediente(
		fecha_inicio: date = date(2024, 3, 1),
		cantidad_cuotas: int | None = 12,
		con_especificacion: bool = True,
	):
		contador["n"] += 1
		paciente = Paciente(
			documento=f"DOC-{contador['n']:05d}",
			nombre1="Ana",
			apellido1="Pérez",
		)
		db_session.add(paciente)

		especificacion = None
		if con_especificacion:
			especificacion = Especificacion(nombre="Especificación test", cantidad_cuotas=cantidad_cuotas)
			db_session.add(especificacion)

		db_session.flush()
		e = Expediente(
			fecha_inicio=fecha_inicio,
			rnt="RNT-1",
			caso_nuevo=True,
			especificacion_id=especificacion.id_especificacion if especificacion else None,
			paciente_id=paciente.id_paciente,
		)
		db_session.add(e)
		db_session.commit()
		return e

	return _make_expediente


@pytest.fixture()
def payload_resolucion():
	def _payload_resolucion(items: list[dict], estado_id: int = 1, fecha: str = "2024-03-15", descripcion: str = "Test"):
		return {
			"fecha": fecha,
			"descripcion": descripcion,
			"estado_id": estado_id,
			"items_resolucion": items,
		}

	return _payload_resolucion
