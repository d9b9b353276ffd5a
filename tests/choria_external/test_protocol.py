"""Unit tests for the wire models."""

import json

import pytest
from pydantic import BaseModel, ValidationError

from choria_external.protocol import ActivationReply, Reply, Request, StatusCode


def test_reply_defaults_encode_compactly() -> None:
    assert Reply().model_dump_json() == '{"statuscode":0,"statusmsg":"","data":null}'


def test_reply_survives_json_round_trip() -> None:
    reply = Reply(data={"message": "hello", "items": [1, 2, 3]})
    reply.invalid_data("bad input")

    decoded = Reply.model_validate_json(reply.model_dump_json())

    assert decoded.statuscode is StatusCode.INVALID_DATA
    assert decoded.statusmsg == "bad input"
    assert decoded.data == {"message": "hello", "items": [1, 2, 3]}


def test_reply_status_helpers() -> None:
    reply = Reply()
    assert reply.ok

    helpers = [
        (reply.aborted, StatusCode.ABORTED),
        (reply.unknown_action, StatusCode.UNKNOWN_ACTION),
        (reply.missing_data, StatusCode.MISSING_DATA),
        (reply.invalid_data, StatusCode.INVALID_DATA),
        (reply.unknown_error, StatusCode.UNKNOWN_ERROR),
    ]
    for helper, code in helpers:
        helper("failed")
        assert reply.statuscode == code
        assert reply.statusmsg == "failed"
        assert not reply.ok


def test_status_codes_are_ordinal() -> None:
    assert [int(code) for code in StatusCode] == [0, 1, 2, 3, 4, 5]


def test_request_decodes_wire_names() -> None:
    request = Request.model_validate_json(
        json.dumps(
            {
                "$schema": "https://choria.io/schemas/mcorpc/external/v1/rpc_request.json",
                "protocol": "io.choria.mcorpc.external.v1.rpc_request",
                "agent": "echo",
                "action": "ping",
                "requestid": "abc",
                "senderid": "node1",
                "callerid": "choria=rip.mcollective",
                "collective": "mcollective",
                "ttl": 60,
                "msgtime": 1700000000,
                "data": {"message": "hello"},
            }
        )
    )

    assert request.schema_.endswith("rpc_request.json")
    assert request.request_id == "abc"
    assert request.sender_id == "node1"
    assert request.caller_id == "choria=rip.mcollective"
    assert request.ttl == 60
    assert request.time == 1700000000
    assert request.data == {"message": "hello"}


def test_request_partial_document_uses_zero_values() -> None:
    request = Request.model_validate_json('{"action": "ping"}')

    assert request.action == "ping"
    assert request.agent == ""
    assert request.ttl == 0
    assert request.data is None


class Message(BaseModel):
    message: str


def test_parse_data_into_model() -> None:
    reply = Reply()
    request = Request(action="ping", data={"message": "hello"})

    parsed = request.parse_data(Message, reply)

    assert parsed == Message(message="hello")
    assert reply.ok


def test_parse_data_failure_marks_reply_invalid() -> None:
    reply = Reply()
    request = Request(agent="echo", action="ping", data=[1, 2])

    assert request.parse_data(Message, reply) is None
    assert reply.statuscode == StatusCode.INVALID_DATA
    assert reply.statusmsg.startswith("Could not parse request data for echo#ping")


def test_parse_data_into_plain_types() -> None:
    reply = Reply()
    request = Request(data={"a": "1"})

    assert request.parse_data(dict[str, str], reply) == {"a": "1"}


def test_activation_reply_encoding() -> None:
    assert ActivationReply(activate=True).model_dump_json() == '{"activate":true}'


def test_reply_rejects_status_outside_taxonomy() -> None:
    reply = Reply()

    with pytest.raises(ValidationError):
        reply.statuscode = 9

    assert reply.statuscode == StatusCode.OK
