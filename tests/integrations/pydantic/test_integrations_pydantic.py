"""Tests for pydantic model arguments."""

from pydantic import BaseModel

from fnwire import Container, declare, run
from fnwire.integrations.pydantic import BASE_MODEL, is_pydantic_model
from fnwire.keys import canonical_key


class _DatabaseConfig(BaseModel):
    host: str
    port: int = 5432


class TestPydanticDetection:
    def test_base_model_is_loaded(self) -> None:
        assert BASE_MODEL is BaseModel

    def test_model_instances_are_detected(self) -> None:
        assert is_pydantic_model(_DatabaseConfig(host="db"))
        assert not is_pydantic_model({"host": "db"})
        assert not is_pydantic_model(_DatabaseConfig)


class TestPydanticArguments:
    def test_model_is_keyed_like_its_json_dump(self) -> None:
        assert canonical_key(_DatabaseConfig(host="db")) == canonical_key(
            {"port": 5432, "host": "db"},
        )

    def test_equal_models_share_memoized_value(self) -> None:
        connection = declare("Connection")
        container = Container()
        container.install([connection.impl(lambda config: object())])

        first = container.get(connection.injectable, _DatabaseConfig(host="db"))
        second = container.get(connection.injectable, _DatabaseConfig(host="db", port=5432))
        other = container.get(connection.injectable, _DatabaseConfig(host="replica"))

        assert first is second
        assert other is not first

    def test_handler_receives_original_model(self) -> None:
        connection = declare("Connection")
        config = _DatabaseConfig(host="db")

        received = run(lambda: connection(config), [connection.impl(lambda arg: arg)])

        assert received is config
