import pytest

from src.timeclock.timeclock.core.constants import DEFAULT_IMAGE_URL
from src.timeclock.timeclock.core.exceptions import NotFoundError, ValidationError
from src.timeclock.timeclock.workers.memory_worker_repository import InMemoryWorkerRepository
from src.timeclock.timeclock.workers.service import WorkerService


@pytest.fixture
def workers():
    return WorkerService(InMemoryWorkerRepository())


def test_create_worker_defaults_image_and_rate(workers):
    worker_id = workers.create_worker(name="  Luca Verdi ")

    worker = workers.get_worker(worker_id)
    assert worker.name == "Luca Verdi"
    assert worker.image_url == DEFAULT_IMAGE_URL
    assert worker.hourly_rate == 0.0


def test_create_worker_requires_name(workers):
    with pytest.raises(ValidationError):
        workers.create_worker(name="   ")


def test_create_worker_rejects_negative_rate(workers):
    with pytest.raises(ValidationError):
        workers.create_worker(name="Luca", hourly_rate=-3)


def test_list_workers_sorted_by_name(workers):
    workers.create_worker(name="Zeno")
    workers.create_worker(name="anna")

    assert [w.name for w in workers.list_workers()] == ["anna", "Zeno"]


def test_update_worker(workers):
    worker_id = workers.create_worker(name="Luca", hourly_rate=10)

    workers.update_worker(worker_id, name="Luca Verdi", hourly_rate="11.499")

    worker = workers.get_worker(worker_id)
    assert worker.name == "Luca Verdi"
    assert worker.hourly_rate == 11.5


def test_update_unknown_worker(workers):
    with pytest.raises(NotFoundError):
        workers.update_worker("missing", name="X")


def test_delete_worker_reports_whether_it_existed(workers):
    worker_id = workers.create_worker(name="Luca")

    assert workers.delete_worker(worker_id) is True
    assert workers.delete_worker(worker_id) is False
    assert workers.get_worker(worker_id) is None
