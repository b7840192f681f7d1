"""
CLI Unit Tests
Tests for commitree_cli: hash, root, prove, verify and config commands.

Every test runs main() from an empty temporary directory so that no
./commitree.yaml from the developer's checkout is picked up.
"""
import json

import pytest

from commitree.crypto.hashing import from_hex, sha256, to_hex
from commitree.merkle import MerkleTree
from commitree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)
from commitree_cli.main import create_parser, main
from fixtures import CORRUPTED_GANDALF_LINES, GANDALF_LINES, RING_VERSE


HOBBIT = "In a hole in the ground there lived a hobbit."
HOBBIT_HASH = "0x38a76005681abd4a4f50a364d472016436f17e79778577ee5825580f06997202"


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def items_file(tmp_path):
    path = tmp_path / "gandalf.txt"
    path.write_text("\n".join(GANDALF_LINES) + "\n\n", encoding="utf-8")
    return path


def _prove_to_file(tmp_path, capsys, items=GANDALF_LINES, target=GANDALF_LINES[2]) -> str:
    out = tmp_path / "proof.json"
    code = main(["prove", *items, "--target", target, "--out", str(out), "--json"])
    capsys.readouterr()
    assert code == EXIT_SUCCESS
    return str(out)


class TestParser:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
        assert "usage" in capsys.readouterr().out.lower()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "commitree" in capsys.readouterr().out

    def test_prove_requires_target(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["prove", "a", "b"])


class TestHashCommand:
    def test_hobbit_vector(self, capsys):
        assert main(["hash", HOBBIT]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == HOBBIT_HASH

    def test_json_output(self, capsys):
        main(["hash", HOBBIT, "--json"])

        payload = json.loads(capsys.readouterr().out)

        assert payload == [{"input": HOBBIT, "hash": HOBBIT_HASH}]

    def test_hex_prefix_disabled_by_env(self, capsys, monkeypatch):
        monkeypatch.setenv("COMMITREE_HEX_PREFIX", "false")

        main(["hash", HOBBIT])

        assert capsys.readouterr().out.strip() == HOBBIT_HASH[2:]


class TestRootCommand:
    def test_two_halves(self, capsys):
        code = main(["root", "In a hole in the ground ", "there lived a hobbit."])

        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert "root: 0xe7dbb63c6671bdf7581e418da8feee175e86adc84adc8e123a30407dd8e730f3" in out
        assert "leaves: 2" in out

    def test_levels(self, capsys):
        main(["root", *RING_VERSE, "--levels"])

        assert "level sizes: [5, 3, 2, 1]" in capsys.readouterr().out

    def test_from_file_skips_blank_lines(self, capsys, items_file):
        main(["root", "--file", str(items_file), "--json"])

        payload = json.loads(capsys.readouterr().out)
        assert payload["leaf_count"] == 5
        assert payload["root"] == to_hex(MerkleTree.build(GANDALF_LINES).root())

    def test_insert_matches_fresh_build(self, capsys):
        main(["root", *RING_VERSE[:3], "--insert", RING_VERSE[3], "--insert", RING_VERSE[4], "--json"])

        payload = json.loads(capsys.readouterr().out)
        assert len(payload["root_history"]) == 3
        assert payload["root"] == to_hex(MerkleTree.build(RING_VERSE).root())
        assert payload["root_history"][0] == to_hex(MerkleTree.build(RING_VERSE[:3]).root())

    def test_insert_human_output(self, capsys):
        main(["root", "a", "--insert", "b"])

        out = capsys.readouterr().out
        assert "initial root: " in out
        assert "after insert 1: " in out

    def test_empty_input(self, capsys):
        assert main(["root"]) == EXIT_RUNTIME_ERROR
        assert "empty" in capsys.readouterr().err

    def test_missing_file(self, capsys):
        assert main(["root", "--file", "absent.txt"]) == EXIT_RUNTIME_ERROR
        assert "Item file not found" in capsys.readouterr().err

    def test_json_from_config_file(self, capsys, isolated_cwd):
        (isolated_cwd / "commitree.yaml").write_text("output:\n  format: json\n")

        main(["root", "a", "b"])

        assert json.loads(capsys.readouterr().out)["leaf_count"] == 2


class TestProveCommand:
    def test_human_output(self, capsys):
        tree = MerkleTree.build(GANDALF_LINES)

        code = main(["prove", *GANDALF_LINES, "--target", GANDALF_LINES[2]])

        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert f"root: {to_hex(tree.root())}" in out
        assert "index: 2" in out
        assert "path (3):" in out

    def test_json_document(self, capsys):
        main(["prove", *GANDALF_LINES, "--target", GANDALF_LINES[2], "--json"])

        payload = json.loads(capsys.readouterr().out)
        tree = MerkleTree.build(GANDALF_LINES)
        assert payload["scheme"] == "sorted-pair-merkle-v1"
        assert [from_hex(s) for s in payload["siblings"]] == tree.proof_of_inclusion(tree.leaves[2])

    def test_missing_target(self, capsys):
        code = main(["prove", *GANDALF_LINES, "--target", "LONG LIVE SAURON "])

        assert code == EXIT_RUNTIME_ERROR
        assert "Leaf hash not found" in capsys.readouterr().err

    def test_writes_file(self, tmp_path, capsys):
        path = _prove_to_file(tmp_path, capsys)

        document = json.loads(open(path, encoding="utf-8").read())
        assert document["index"] == 2


class TestVerifyCommand:
    def test_document_mode(self, tmp_path, capsys):
        path = _prove_to_file(tmp_path, capsys)

        code = main(["verify", path])

        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert "valid: true" in out
        assert "root (document)" in out

    def test_tree_mode(self, tmp_path, capsys):
        path = _prove_to_file(tmp_path, capsys)

        code = main(["verify", path, *GANDALF_LINES, "--json"])

        payload = json.loads(capsys.readouterr().out)
        assert code == EXIT_SUCCESS
        assert payload["mode"] == "tree"
        assert payload["valid"] is True

    def test_corrupted_tree_fails(self, tmp_path, capsys):
        path = _prove_to_file(tmp_path, capsys)

        code = main(["verify", path, *CORRUPTED_GANDALF_LINES])

        assert code == EXIT_VERIFICATION_FAILED
        assert "valid: false" in capsys.readouterr().out

    def test_tampered_document_fails(self, tmp_path, capsys):
        path = _prove_to_file(tmp_path, capsys)
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
        document["root"] = to_hex(sha256(b"forged root"))
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f)

        assert main(["verify", path]) == EXIT_VERIFICATION_FAILED

    def test_malformed_document(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"leaf": "0x00", "index": 0, "root": "0x00"}))

        assert main(["verify", str(path)]) == EXIT_RUNTIME_ERROR
        assert "invalid proof document" in capsys.readouterr().err

    def test_missing_document(self, capsys):
        assert main(["verify", "absent.json"]) == EXIT_RUNTIME_ERROR

    def test_valid_json_summary_has_no_error(self, tmp_path, capsys):
        path = _prove_to_file(tmp_path, capsys)

        main(["verify", path, "--json"])

        assert "error" not in json.loads(capsys.readouterr().out)

    def test_invalid_json_summary_carries_proof_error(self, tmp_path, capsys):
        path = _prove_to_file(tmp_path, capsys)

        code = main(["verify", path, *CORRUPTED_GANDALF_LINES, "--json"])

        payload = json.loads(capsys.readouterr().out)
        corrupted_root = to_hex(MerkleTree.build(CORRUPTED_GANDALF_LINES).root())
        assert code == EXIT_VERIFICATION_FAILED
        assert payload["valid"] is False
        assert payload["error"]["code"] == "MERKLE_PROOF_INVALID"
        assert payload["error"]["leaf"] == to_hex(MerkleTree.hash(GANDALF_LINES[2]))
        assert payload["error"]["root"] == corrupted_root
        assert payload["error"]["retryable"] is False

    def test_malformed_document_json_error(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"leaf": "0x00", "index": 0, "root": "0x00"}))

        code = main(["verify", str(path), "--json"])

        payload = json.loads(capsys.readouterr().out)
        assert code == EXIT_RUNTIME_ERROR
        assert payload["code"] == "SCHEMA_VALIDATION_ERROR"
        assert set(payload["details"]["fields"]) == {"leaf", "root"}


class TestConfigCommand:
    def test_init_then_show(self, isolated_cwd, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert (isolated_cwd / "commitree.yaml").exists()
        capsys.readouterr()

        assert main(["config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["output"]["format"] == "human"

    def test_init_refuses_overwrite(self, isolated_cwd, capsys):
        (isolated_cwd / "commitree.yaml").write_text("{}\n")

        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR
        assert "refusing to overwrite" in capsys.readouterr().err

    def test_explicit_missing_config(self, capsys):
        assert main(["--config", "nope.yaml", "hash", "x"]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err

    def test_invalid_config_value(self, isolated_cwd, capsys):
        (isolated_cwd / "commitree.yaml").write_text("logging:\n  level: chatty\n")

        assert main(["hash", "x"]) == EXIT_RUNTIME_ERROR

    def test_unwritable_log_file(self, isolated_cwd, capsys, monkeypatch):
        monkeypatch.setenv("COMMITREE_LOG_FILE", str(isolated_cwd / "no-such-dir" / "commitree.log"))

        assert main(["hash", "x"]) == EXIT_RUNTIME_ERROR
        assert "Error opening log file" in capsys.readouterr().err
