import pytest
from jsonpatch import JsonPatchConflict, JsonPatchTestFailed
from jsonpointer import JsonPointerException
from pydantic import ValidationError

from src.models.command import Command
from src.models.mapping import (
    apply_json_patch,
    apply_patch_request,
    apply_update_request,
    command_from_create_request,
    command_from_document,
    command_to_document,
    command_to_read_response,
    command_to_update_request,
)
from src.models.requests import (
    CommandCreateRequest,
    CommandPatchRequest,
    CommandUpdateRequest,
    JsonPatchOperation,
)


@pytest.fixture
def stored_command() -> Command:
    return Command(id=3, how_to="Build image", platform="Docker", command_line="docker build .")


def test_create_request_leaves_id_unset() -> None:
    request = CommandCreateRequest(howTo="List pods", platform="k8s", commandLine="kubectl get pods")

    command = command_from_create_request(request)

    assert command == Command(
        id=None, how_to="List pods", platform="k8s", command_line="kubectl get pods"
    )


def test_read_response_uses_camel_case(stored_command: Command) -> None:
    response = command_to_read_response(stored_command)

    assert response.model_dump(by_alias=True) == {
        "id": 3,
        "howTo": "Build image",
        "platform": "Docker",
        "commandLine": "docker build .",
    }


def test_read_response_requires_saved_command() -> None:
    with pytest.raises(ValueError):
        command_to_read_response(Command(how_to="unsaved"))


def test_update_overwrites_fields_but_not_id(stored_command: Command) -> None:
    apply_update_request(CommandUpdateRequest(platform="Podman"), stored_command)

    assert stored_command == Command(id=3, how_to=None, platform="Podman", command_line=None)


def test_patch_merges_only_set_fields(stored_command: Command) -> None:
    patch = CommandPatchRequest.model_validate({"commandLine": "docker build -t app ."})

    patched = apply_patch_request(patch, command_to_update_request(stored_command))

    assert patched.how_to == "Build image"
    assert patched.platform == "Docker"
    assert patched.command_line == "docker build -t app ."


def test_patch_producing_invalid_update_raises(stored_command: Command) -> None:
    patch = CommandPatchRequest.model_construct(_fields_set={"platform"}, platform=12)

    with pytest.raises(ValidationError):
        apply_patch_request(patch, command_to_update_request(stored_command))


def test_patch_rejects_id() -> None:
    with pytest.raises(ValidationError):
        CommandPatchRequest.model_validate({"id": 9})


def test_document_round_trip(stored_command: Command) -> None:
    assert command_from_document(command_to_document(stored_command)) == stored_command


def _operations(*raw: dict) -> list:
    return [JsonPatchOperation.model_validate(op) for op in raw]


def test_json_patch_replace_and_remove(stored_command: Command) -> None:
    current = command_to_update_request(stored_command)

    patched = apply_json_patch(
        _operations(
            {"op": "replace", "path": "/platform", "value": "Podman"},
            {"op": "remove", "path": "/howTo"},
        ),
        current,
    )

    assert patched.platform == "Podman"
    assert patched.how_to is None
    assert patched.command_line == "docker build ."
    # current is not modified
    assert current.platform == "Docker"


def test_json_patch_move_uses_from_pointer(stored_command: Command) -> None:
    patched = apply_json_patch(
        _operations({"op": "move", "from": "/commandLine", "path": "/howTo"}),
        command_to_update_request(stored_command),
    )

    assert patched.how_to == "docker build ."
    assert patched.command_line is None


def test_json_patch_operation_keeps_from_key() -> None:
    operation = JsonPatchOperation.model_validate(
        {"op": "copy", "from": "/platform", "path": "/howTo"}
    )

    assert operation.to_operation() == {"op": "copy", "from": "/platform", "path": "/howTo"}


def test_json_patch_adding_id_raises(stored_command: Command) -> None:
    with pytest.raises(ValidationError):
        apply_json_patch(
            _operations({"op": "add", "path": "/id", "value": 9}),
            command_to_update_request(stored_command),
        )


def test_json_patch_unknown_path_raises(stored_command: Command) -> None:
    with pytest.raises(JsonPatchConflict):
        apply_json_patch(
            _operations({"op": "remove", "path": "/nope"}),
            command_to_update_request(stored_command),
        )


def test_json_patch_path_without_slash_raises(stored_command: Command) -> None:
    with pytest.raises(JsonPointerException):
        apply_json_patch(
            _operations({"op": "replace", "path": "platform", "value": "x"}),
            command_to_update_request(stored_command),
        )


def test_json_patch_failed_test_raises(stored_command: Command) -> None:
    with pytest.raises(JsonPatchTestFailed):
        apply_json_patch(
            _operations({"op": "test", "path": "/platform", "value": "Windows"}),
            command_to_update_request(stored_command),
        )


def test_json_patch_operation_rejects_unknown_op() -> None:
    with pytest.raises(ValidationError):
        JsonPatchOperation.model_validate({"op": "frobnicate", "path": "/platform"})


@pytest.mark.parametrize(
    "model", [CommandCreateRequest, CommandUpdateRequest, CommandPatchRequest]
)
def test_request_models_share_command_fields(model) -> None:
    request = model.model_validate(
        {"howTo": "Show disk", "platform": "Linux", "commandLine": "df -h"}
    )

    assert set(model.model_fields) == {"how_to", "platform", "command_line"}
    assert (request.how_to, request.platform, request.command_line) == (
        "Show disk",
        "Linux",
        "df -h",
    )
