import pytest

from pos_api.core.errors import ValidationFailure
from pos_api.database import transaction
from pos_api.models.employees import Employee
from pos_api.models.job_positions import AccessFlag, JobPosition


def test_list_and_create_job_positions(client, menu):
    response = client.post("/job-positions", json={"name": "Cook", "access": int(AccessFlag.READ_ORDERS)})
    assert response.status_code == 201
    assert response.json()["permissions"] == ["READ_ORDERS"]

    names = [position["name"] for position in client.get("/job-positions").json()]
    assert names == ["Employee", "Manager", "Cook"]


def test_duplicate_job_position_name_conflicts(client, menu):
    response = client.post("/job-positions", json={"name": "Manager", "access": 0})
    assert response.status_code == 409
    assert response.json() == {"detail": "Job position with this name already exists"}


def test_position_held_by_employees_cannot_be_deleted(client, db, menu):
    casey = db.get(Employee, menu["employees"]["Casey Cashier"])
    position_id = casey.job_position_id

    response = client.delete(f"/job-positions/{position_id}")

    assert response.status_code == 422
    assert "still held by 1 employee" in response.json()["detail"]
    db.expire_all()
    assert db.get(Employee, casey.id).job_position_id == position_id
    assert db.get(JobPosition, position_id) is not None


def test_database_refuses_deleting_a_held_position(db, menu):
    morgan = db.get(Employee, menu["employees"]["Morgan Manager"])
    position_id = morgan.job_position_id

    with pytest.raises(ValidationFailure, match="Constraint violation"):
        with transaction(db):
            db.delete(db.get(JobPosition, position_id))

    assert db.get(Employee, morgan.id).job_position_id == position_id


def test_unused_position_can_be_deleted(client, menu):
    position_id = client.post("/job-positions", json={"name": "Cook"}).json()["id"]

    assert client.delete(f"/job-positions/{position_id}").status_code == 204
    assert client.delete(f"/job-positions/{position_id}").status_code == 404
