import pytest

from app.core.exceptions import EntityNotFoundError, StoreFailure
from app.core.table_store import TableClient, UpdateMode
from app.models.client import Client
from app.models.vehicle import Vehicle


def make_vehicle(plate="ABC123", brand="Toyota", model="Corolla", available=True):
    return Vehicle(
        partition_key="Veiculo",
        row_key=plate,
        brand=brand,
        model=model,
        year=2022,
        daily_rate=150.0,
        image_url="",
        available=available,
    )


async def test_create_and_get_entity(session):
    table = TableClient(session, Vehicle)
    await table.create_entity(make_vehicle())

    vehicle = await table.get_entity("Veiculo", "ABC123")
    assert vehicle.brand == "Toyota"
    assert vehicle.available is True
    assert vehicle.timestamp is not None


async def test_get_missing_entity_raises_not_found(session):
    table = TableClient(session, Vehicle)
    with pytest.raises(EntityNotFoundError) as exc_info:
        await table.get_entity("Veiculo", "NOPE000")
    assert exc_info.value.row_key == "NOPE000"
    assert isinstance(exc_info.value, StoreFailure)


async def test_create_duplicate_key_is_a_store_failure(session_maker):
    async with session_maker() as first:
        await TableClient(first, Vehicle).create_entity(make_vehicle())
    async with session_maker() as second:
        with pytest.raises(StoreFailure):
            await TableClient(second, Vehicle).create_entity(make_vehicle(brand="Honda"))


async def test_merge_update_only_touches_given_fields(session_maker):
    async with session_maker() as session:
        table = TableClient(session, Vehicle)
        await table.create_entity(make_vehicle())
        await table.update_entity({"partition_key": "Veiculo", "row_key": "ABC123", "available": False})

    async with session_maker() as session:
        vehicle = await TableClient(session, Vehicle).get_entity("Veiculo", "ABC123")
        assert vehicle.available is False
        assert vehicle.brand == "Toyota"
        assert vehicle.daily_rate == 150.0


async def test_replace_update_clears_fields_not_given(session_maker):
    async with session_maker() as session:
        table = TableClient(session, Client)
        await table.create_entity(
            Client(partition_key="Cliente", row_key="1", name="Ana", email="ana@example.com", phone="123")
        )
        await table.update_entity(
            {"partition_key": "Cliente", "row_key": "1", "name": "Ana Maria"},
            UpdateMode.replace,
        )

    async with session_maker() as session:
        client = await TableClient(session, Client).get_entity("Cliente", "1")
        assert client.name == "Ana Maria"
        assert client.email is None
        assert client.phone is None


async def test_update_with_unknown_property_is_rejected(session):
    table = TableClient(session, Vehicle)
    await table.create_entity(make_vehicle())
    with pytest.raises(StoreFailure):
        await table.update_entity({"partition_key": "Veiculo", "row_key": "ABC123", "color": "red"})


async def test_update_missing_entity_raises_not_found(session):
    table = TableClient(session, Vehicle)
    with pytest.raises(EntityNotFoundError):
        await table.update_entity({"partition_key": "Veiculo", "row_key": "ZZZ999", "available": True})


async def test_delete_entity(session):
    table = TableClient(session, Vehicle)
    await table.create_entity(make_vehicle())
    await table.delete_entity("Veiculo", "ABC123")
    with pytest.raises(EntityNotFoundError):
        await table.get_entity("Veiculo", "ABC123")


async def test_list_entities_applies_filters_in_query(session):
    table = TableClient(session, Vehicle)
    await table.create_entity(make_vehicle("AAA111", available=True))
    await table.create_entity(make_vehicle("BBB222", available=False))
    await table.create_entity(make_vehicle("CCC333", brand="Honda", model="Civic", available=True))

    everything = [v.row_key async for v in table.list_entities()]
    available = [v.row_key async for v in table.list_entities(available=True)]

    assert sorted(everything) == ["AAA111", "BBB222", "CCC333"]
    assert sorted(available) == ["AAA111", "CCC333"]


async def test_list_entities_with_unknown_filter_fails(session):
    table = TableClient(session, Vehicle)
    with pytest.raises(StoreFailure):
        [v async for v in table.list_entities(color="red")]


@pytest.mark.parametrize("attribute", ["metadata", "registry", "__tablename__"])
async def test_list_entities_only_filters_on_columns(session, attribute):
    table = TableClient(session, Vehicle)
    with pytest.raises(StoreFailure):
        [v async for v in table.list_entities(**{attribute: "x"})]


async def test_list_entities_filters_on_keys(session):
    table = TableClient(session, Client)
    await table.create_entity(Client(partition_key="Cliente", row_key="1", name="Ana"))
    await table.create_entity(Client(partition_key="Cliente", row_key="2", name="Bruno"))

    found = [c.name async for c in table.list_entities(row_key="2")]
    assert found == ["Bruno"]


async def test_get_entity_without_row_key_raises_not_found(session):
    with pytest.raises(EntityNotFoundError):
        await TableClient(session, Client).get_entity("Cliente", None)
