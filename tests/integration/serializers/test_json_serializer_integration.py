"""
Integration tests for tagged JSON output.

These tests exercise the public API end to end: a default registry with the
built-in types plus application classes, nested structures, nested encodes,
and both activation strategies.

Run: pytest -m integration tests/integration/serializers/
"""

from dataclasses import dataclass
from datetime import datetime
import json
from typing import Any

from pytest import FixtureRequest, fixture, mark, raises

from tagjson import Config, JsonSerializer, TypeReplacer, create_default_registry


@dataclass
class Attachment:
    name: str
    content: bytes


@dataclass
class Message:
    sender: str
    sent_at: datetime
    attachments: list[Attachment]

    def __json__(self) -> dict[str, Any]:
        return {"sender": self.sender}


@fixture(params=["lookup", "patch"])
def serializer(request: FixtureRequest) -> JsonSerializer:
    instance = JsonSerializer(create_default_registry(), Config(strategy=request.param))
    instance.add(
        TypeReplacer(
            object_type="Attachment",
            object_constructor=Attachment,
            serialize=lambda a: {"name": a.name, "size": len(a.content)},
        )
    )
    return instance


@mark.integration
class TestJsonSerializerIntegration:
    """End-to-end encoding scenarios."""

    def test_nested_application_types(self, serializer: JsonSerializer) -> None:
        # Arrange
        original_hook = vars(Message)["__json__"]
        message = Message(
            sender="ada",
            sent_at=datetime(2024, 5, 6, 7, 8, 9),
            attachments=[Attachment("a.txt", b"abc")],
        )
        serializer.register(
            Message,
            "Message",
            lambda m: {"sender": m.sender, "attachments": m.attachments},
        )

        # Act
        result = json.loads(serializer.stringify({"messages": [message]}))

        # Assert
        assert result == {
            "messages": [
                {
                    "type": "Message",
                    "data": {
                        "sender": "ada",
                        "attachments": [
                            {"type": "Attachment", "data": {"name": "a.txt", "size": 3}}
                        ],
                    },
                }
            ]
        }
        assert vars(Message)["__json__"] is original_hook
        assert "__json__" not in vars(Attachment)

    def test_application_hook_used_when_not_registered(self, serializer: JsonSerializer) -> None:
        message = Message("bob", datetime(2024, 1, 1), [])

        assert json.loads(serializer.stringify(message)) == {"sender": "bob"}

    def test_serialize_to_bytes(self, serializer: JsonSerializer) -> None:
        data = serializer.serialize([Attachment("b.bin", b"\x00")])

        assert json.loads(data) == [{"type": "Attachment", "data": {"name": "b.bin", "size": 1}}]

    def test_recursive_stringify_from_conversion(self, serializer: JsonSerializer) -> None:
        @dataclass
        class Envelope:
            body: Any

        serializer.register(Envelope, "Envelope", lambda e: serializer.stringify(e.body))

        text = serializer.stringify(Envelope(Envelope(Attachment("c", b"xy"))))

        outer = json.loads(text)
        middle = json.loads(outer["data"])
        inner = json.loads(middle["data"])
        assert outer["type"] == middle["type"] == "Envelope"
        assert inner == {"type": "Attachment", "data": {"name": "c", "size": 2}}
        assert serializer.session.depth == 0
        assert "__json__" not in vars(Envelope)

    def test_failure_leaves_types_untouched(self, serializer: JsonSerializer) -> None:
        with raises(TypeError):
            serializer.stringify({"attachment": Attachment("d", b""), "bad": {1, 2}})

        assert "__json__" not in vars(Attachment)
        assert serializer.session.depth == 0
        assert json.loads(serializer.stringify(Attachment("d", b""))) == {
            "type": "Attachment",
            "data": {"name": "d", "size": 0},
        }
