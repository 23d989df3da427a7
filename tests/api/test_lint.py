"""Tests for lint API router."""

from fastapi.testclient import TestClient

from skillcorpus.api import create_app
from skillcorpus.core.context import SharedContext


def test_lint_report(test_config, write_skill):
    write_skill("solidity-reentrancy")
    write_skill("docker-compose", "---\nname: docker-compose\n---\nBody\n")

    with TestClient(create_app(SharedContext(test_config))) as client:
        response = client.get("/lint")

    assert response.status_code == 200
    report = response.json()
    assert report["skills_checked"] == 2
    assert report["ok"] is False
    assert report["error_count"] == 2
    assert {issue["skill_id"] for issue in report["issues"]} == {"docker-compose"}


def test_lint_missing_skills_path(test_config):
    with TestClient(create_app(SharedContext(test_config))) as client:
        response = client.get("/lint")

    assert response.status_code == 404


def test_lint_unknown_skill(test_config, skills_dir):
    with TestClient(create_app(SharedContext(test_config))) as client:
        response = client.get("/lint/docker-missing")

    assert response.status_code == 404


def test_lint_report_survives_undecodable_document(test_config, write_skill):
    write_skill("solidity-reentrancy")
    write_skill("docker-bad", "").write_bytes(b"---\nname: x\n---\n\xff\xfe body")

    with TestClient(create_app(SharedContext(test_config))) as client:
        response = client.get("/lint")

    assert response.status_code == 200
    issues = response.json()["issues"]
    assert [(i["skill_id"], i["rule"]) for i in issues] == [("docker-bad", "layout/skill-file")]
