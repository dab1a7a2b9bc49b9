import pytest

from shared.application.uow import AbstractUnitOfWork, DjangoUnitOfWork


def test_abstract_unit_of_work_cannot_be_instantiated():
    with pytest.raises(TypeError):
        AbstractUnitOfWork()


@pytest.mark.django_db
def test_callbacks_run_after_commit(django_capture_on_commit_callbacks):
    calls = []

    with django_capture_on_commit_callbacks(execute=True):
        with DjangoUnitOfWork() as uow:
            uow.on_commit(lambda: calls.append("committed"))
            assert calls == []

    assert calls == ["committed"]


@pytest.mark.django_db
def test_rollback_discards_callbacks(django_capture_on_commit_callbacks):
    calls = []

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(RuntimeError):
            with DjangoUnitOfWork() as uow:
                uow.on_commit(lambda: calls.append("committed"))
                raise RuntimeError("boom")

    assert callbacks == []
    assert calls == []
