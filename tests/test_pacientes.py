"""
Tests de los endpoints de pacientes.
"""

from app.models.paciente import Paciente


async def test_buscar_por_dni(client, paciente):
    resp = await client.get("/api/pacientes", params={"dni": "12345678"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == paciente.id
    assert body["apellido_nombre"] == "Pérez, Juan"
    assert body["fecha_nacimiento"] == "1990-01-01"
    assert body["obra_social"] == "OSEP"


async def test_buscar_dni_inexistente_devuelve_null(client, paciente):
    resp = await client.get("/api/pacientes", params={"dni": "99999999"})

    assert resp.status_code == 200
    assert resp.json() is None


async def test_buscar_sin_dni_devuelve_null(client, paciente):
    resp = await client.get("/api/pacientes")

    assert resp.status_code == 200
    assert resp.json() is None


async def test_detalle_con_ultimas_ordenes(client, paciente):
    for _ in range(12):
        resp = await client.post(
            "/api/ordenes",
            json={"dniPaciente": "12345678", "apellidoNombre": "Pérez, Juan", "listaDeterminaciones": ["GLU"]},
        )
        assert resp.status_code == 201
    ultima_id = resp.json()["id"]

    resp = await client.get(f"/api/pacientes/{paciente.id}")

    assert resp.status_code == 200
    body = resp.json()
    assert body["dni"] == "12345678"
    assert len(body["ordenes"]) == 10
    assert body["ordenes"][0]["id"] == ultima_id
    assert body["ordenes"][0]["lista_determinaciones_nbu"] == ["GLU"]


async def test_detalle_inexistente(client):
    resp = await client.get("/api/pacientes/999")

    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Paciente no encontrado"}


async def test_crear_paciente(client, db_session):
    resp = await client.post(
        "/api/pacientes",
        json={
            "dni": "28999111",
            "apellidoNombre": "López, María",
            "fechaNacimiento": "1985-06-15",
            "email": "",
            "obraSocial": "OSDE",
            "nroAfiliado": "123/4",
        },
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["apellido_nombre"] == "López, María"
    assert body["obra_social"] == "OSDE"
    assert body["email"] is None
    assert body["telefono"] is None

    paciente = await db_session.get(Paciente, body["id"])
    assert paciente.nro_afiliado == "123/4"


async def test_crear_paciente_sin_dni(client):
    resp = await client.post("/api/pacientes", json={"apellidoNombre": "N.N."})

    assert resp.status_code == 201
    assert resp.json()["dni"] is None


async def test_crear_paciente_sin_nombre(client):
    resp = await client.post("/api/pacientes", json={"dni": "1"})

    assert resp.status_code == 400
    assert resp.json()["success"] is False


async def test_actualizar_paciente(client, paciente):
    resp = await client.put(
        f"/api/pacientes/{paciente.id}",
        json={"telefono": "2619999999", "domicilio": "Belgrano 50"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["telefono"] == "2619999999"
    assert body["domicilio"] == "Belgrano 50"
    # Campos no enviados no cambian
    assert body["email"] == "juan.perez@example.com"
    assert body["apellido_nombre"] == "Pérez, Juan"


async def test_actualizar_nombre_vacio_o_nulo(client, db_session, paciente):
    for valor in ("", None):
        resp = await client.put(
            f"/api/pacientes/{paciente.id}", json={"apellidoNombre": valor}
        )

        assert resp.status_code == 400
        assert resp.json() == {
            "success": False,
            "error": "El campo apellido_nombre es requerido",
        }

    await db_session.refresh(paciente)
    assert paciente.apellido_nombre == "Pérez, Juan"


async def test_actualizar_paciente_inexistente(client):
    resp = await client.put("/api/pacientes/999", json={"telefono": "1"})

    assert resp.status_code == 404
