"""Tests for skills API router."""

import pytest
from fastapi.testclient import TestClient

from skillcorpus.api import create_app
from skillcorpus.api.schemas import SkillCreate
from skillcorpus.core.context import SharedContext


@pytest.fixture
def client(test_config, write_skill):
    """Create test client over a corpus with one skill."""
    write_skill("solidity-reentrancy")
    app = create_app(SharedContext(test_config))

    with TestClient(app) as client:
        yield client


class TestListSkills:
    def test_list_skills_returns_empty_list_when_no_skills(self, test_config, skills_dir):
        app = create_app(SharedContext(test_config))

        with TestClient(app) as client:
            response = client.get("/skills")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_skills_returns_skills(self, client):
        response = client.get("/skills")

        assert response.status_code == 200
        skills = response.json()
        assert len(skills) == 1
        assert skills[0]["id"] == "solidity-reentrancy"
        assert skills[0]["prefix"] == "solidity"
        assert skills[0]["version"] == "1.2.0"

    def test_list_skills_by_prefix(self, client):
        assert client.get("/skills", params={"prefix": "docker"}).json() == []
        assert len(client.get("/skills", params={"prefix": "solidity"}).json()) == 1


class TestGetSkill:
    def test_get_skill_returns_skill(self, client):
        response = client.get("/skills/solidity-reentrancy")

        assert response.status_code == 200
        skill = response.json()
        assert skill["id"] == "solidity-reentrancy"
        assert skill["bonded_agent"] == "security-auditor"
        assert skill["parameters"][0]["enum"] == ["low", "medium", "high"]
        assert skill["changelog"][0]["version"] == "1.2.0"
        assert "Check every external call." in skill["content"]

    def test_get_skill_not_found(self, client):
        response = client.get("/skills/solidity-missing")

        assert response.status_code == 404

    def test_get_invalid_skill(self, client, write_skill):
        write_skill("docker-compose", "# no front-matter\n")

        response = client.get("/skills/docker-compose")

        assert response.status_code == 422

    def test_get_undecodable_skill(self, client, write_skill):
        skill_file = write_skill("docker-bad", "")
        skill_file.write_bytes(b"---\nname: x\n---\n\xff\xfe body")

        response = client.get("/skills/docker-bad")

        assert response.status_code == 422
        assert "UTF-8" in response.json()["detail"]


class TestCreateSkill:
    def test_create_skill(self, client):
        skill_data = SkillCreate(
            name="docker-compose",
            description="Write compose files",
            version="1.0.0",
            parameters=[{"name": "engine", "enum": ["docker", "podman"], "default": "docker"}],
            content="# Docker Compose\n\nUse named volumes.",
        )

        response = client.post(
            "/skills/docker-compose", json=skill_data.model_dump(mode="json")
        )

        assert response.status_code == 201
        skill = response.json()
        assert skill["id"] == "docker-compose"
        assert skill["parameters"][0]["type"] == "enum"
        assert skill["parameters"][0]["default"] == "docker"

        lint = client.get("/lint/docker-compose")
        assert lint.json() == []

    def test_create_existing_skill_conflicts(self, client):
        response = client.post(
            "/skills/solidity-reentrancy",
            json={"name": "x", "description": "y", "content": "z"},
        )

        assert response.status_code == 409

    def test_create_rejects_bad_id(self, client):
        response = client.post(
            "/skills/NotKebab",
            json={"name": "x", "description": "y", "content": "z"},
        )

        assert response.status_code == 422


class TestUpdateSkill:
    def test_update_skill(self, client):
        response = client.put(
            "/skills/solidity-reentrancy",
            json={
                "name": "solidity-reentrancy",
                "description": "Updated description",
                "version": "1.3.0",
                "content": "# Updated\n\nThis is updated.",
            },
        )

        assert response.status_code == 200
        skill = response.json()
        assert skill["description"] == "Updated description"
        assert skill["parameters"] == []

    def test_update_missing_skill(self, client):
        response = client.put(
            "/skills/docker-compose",
            json={"name": "x", "description": "y", "content": "z"},
        )

        assert response.status_code == 404


class TestDeleteSkill:
    def test_delete_skill(self, client):
        response = client.delete("/skills/solidity-reentrancy")

        assert response.status_code == 204
        assert client.get("/skills/solidity-reentrancy").status_code == 404

    def test_delete_missing_skill(self, client):
        assert client.delete("/skills/docker-compose").status_code == 404
