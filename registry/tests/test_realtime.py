import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator

from registry.realtime.consumers import RegistryUpdatesConsumer
from registry.services import broadcast
from registry.services.hospitals import create_hospital


@pytest.mark.django_db(transaction=True)
def test_consumer_relays_registry_events():
    async def run():
        communicator = WebsocketCommunicator(RegistryUpdatesConsumer.as_asgi(), "/ws/registry/")
        connected, _ = await communicator.connect()
        assert connected
        assert (await communicator.receive_json_from())["type"] == "welcome"

        event = {"type": "registry.changed", "entity": "hmo", "op": "delete", "id": "abc"}
        await get_channel_layer().group_send(broadcast.GROUP, event)
        assert await communicator.receive_json_from() == event
        await communicator.disconnect()

    async_to_sync(run)()


@pytest.mark.django_db
def test_mutations_publish_after_commit(alice, principal, monkeypatch, django_capture_on_commit_callbacks):
    sent = []
    monkeypatch.setattr(broadcast, "publish", lambda *args: sent.append(args))

    with django_capture_on_commit_callbacks(execute=True):
        result = create_hospital(principal(alice), {"name": "Lagos General"})
        assert sent == []

    assert [(e, op, str(i)) for e, op, i in sent] == [("hospital", "create", result.data["id"])]


@pytest.mark.django_db
def test_failed_mutation_publishes_nothing(alice, principal, monkeypatch, django_capture_on_commit_callbacks):
    sent = []
    monkeypatch.setattr(broadcast, "publish", lambda *args: sent.append(args))

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        result = create_hospital(principal(alice), {"name": "A"})

    assert not result.success
    assert callbacks == []
    assert sent == []
