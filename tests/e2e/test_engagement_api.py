"""End-to-end tests for the engagement API.

The test container keeps in-memory repositories for the lifetime of the
app, so storage seeded through the ``seed`` fixture is visible to every
request a test makes.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from spark.config import Settings
from spark.domain.model import Idea, User
from spark.domain.repository import IdeaRepository, UserRepository
from spark.domain.service import JWTService
from spark.domain.value import TimeCommitment, UserId
from spark.interface.api.app import create_app
from spark.util.di.container import setup_di
from tests.conftest import make_idea, make_user
from tests.di import build_test_container


@pytest.fixture
def container():
    """Test container shared by the app and the seeding helpers."""
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client with test container."""
    app_instance = create_app()
    setup_di(app_instance, container)
    with TestClient(app_instance) as test_client:
        yield test_client


def login(client: TestClient, user_id: UserId, username: str = "alice") -> None:
    """Attach a session cookie for ``user_id`` to the client."""
    jwt_service = JWTService(Settings().auth)
    client.cookies.set("auth_token", jwt_service.create_token(user_id, username))


@pytest.fixture
def authed_client(client):
    """Client carrying a session cookie for a user that does not exist in storage."""
    login(client, UserId(uuid4()))
    return client


@pytest.fixture
def seed(client, container):
    """Save users and ideas into the app's storage on the client's event loop."""

    async def _save(users: list[User], ideas: list[Idea]) -> None:
        user_repo = await container.get(UserRepository)
        idea_repo = await container.get(IdeaRepository)
        for user in users:
            await user_repo.save(user)
        for idea in ideas:
            await idea_repo.save(idea)

    def _seed(users=(), ideas=()) -> None:
        client.portal.call(_save, list(users), list(ideas))

    return _seed


class TestIdeaEndpoints:
    """End-to-end tests for /ideas."""

    def test_list_ideas_empty_feed(self, client):
        # Act
        response = client.get("/ideas", params={"sort": "trending", "tags": "ai, iot"})

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["ideas"] == []
        assert data["pagination"] == {"page": 1, "limit": 20, "total": 0, "pages": 0}

    def test_list_ideas_rejects_bad_limit(self, client):
        # Act
        response = client.get("/ideas", params={"limit": 0})

        # Assert
        assert response.status_code == 422

    def test_get_unknown_idea_is_404(self, client):
        # Arrange
        idea_id = uuid4()

        # Act
        response = client.get(f"/ideas/{idea_id}")

        # Assert
        assert response.status_code == 404
        assert response.json() == {
            "kind": "NOT_FOUND",
            "message": f"Idea not found: {idea_id}",
        }

    def test_vote_requires_authentication(self, client):
        # Act
        response = client.post(f"/ideas/{uuid4()}/vote", json={"type": "UP"})

        # Assert
        assert response.status_code == 401
        assert response.json() == {
            "kind": "UNAUTHENTICATED",
            "message": "Authentication required to vote",
        }

    def test_vote_twice_toggles_off(self, client, seed):
        # Arrange
        author = make_user()
        voter = make_user()
        idea = make_idea(author)
        seed(users=[author, voter], ideas=[idea])
        login(client, voter.id, voter.username)

        # Act
        first = client.post(f"/ideas/{idea.id}/vote", json={"type": "UP"})
        second = client.post(f"/ideas/{idea.id}/vote", json={"type": "UP"})

        # Assert
        assert first.status_code == 200
        assert first.json() == {
            "voteScore": 1,
            "userVote": "UP",
            "karma_applied": True,
            "message": "Vote recorded",
        }
        assert second.status_code == 200
        assert second.json() == {
            "voteScore": 0,
            "userVote": None,
            "karma_applied": True,
            "message": "Vote removed",
        }

    def test_vote_switch_and_detail(self, client, seed):
        # Arrange
        author = make_user()
        voter = make_user()
        idea = make_idea(author)
        seed(users=[author, voter], ideas=[idea])
        login(client, voter.id, voter.username)

        # Act
        client.post(f"/ideas/{idea.id}/vote", json={"type": "UP"})
        switched = client.post(f"/ideas/{idea.id}/vote", json={"type": "DOWN"})
        detail = client.get(f"/ideas/{idea.id}")

        # Assert
        assert switched.json()["voteScore"] == -1
        assert switched.json()["userVote"] == "DOWN"
        assert detail.status_code == 200
        assert detail.json()["idea"]["vote_score"] == -1
        assert detail.json()["idea"]["user_vote"] == "DOWN"

    def test_self_vote_is_forbidden(self, client, seed):
        # Arrange
        author = make_user()
        idea = make_idea(author)
        seed(users=[author], ideas=[idea])
        login(client, author.id, author.username)

        # Act
        response = client.post(f"/ideas/{idea.id}/vote", json={"type": "UP"})

        # Assert
        assert response.status_code == 403
        assert response.json()["kind"] == "FORBIDDEN"

    def test_vote_rejects_unknown_polarity(self, authed_client):
        # Act
        response = authed_client.post(
            f"/ideas/{uuid4()}/vote", json={"type": "SIDEWAYS"}
        )

        # Assert
        assert response.status_code == 422

    def test_vote_on_unknown_idea_is_404(self, authed_client):
        # Act
        response = authed_client.post(
            f"/ideas/{uuid4()}/vote", json={"type": "DOWN"}
        )

        # Assert
        assert response.status_code == 404
        assert response.json()["kind"] == "NOT_FOUND"

    def test_comment_vote_on_unknown_comment_is_404(self, authed_client):
        # Act
        response = authed_client.post(
            f"/comments/{uuid4()}/vote", json={"type": "UP"}
        )

        # Assert
        assert response.status_code == 404
        assert response.json()["message"].startswith("Comment not found")

    def test_bookmark_requires_authentication(self, client):
        # Act
        response = client.post(f"/ideas/{uuid4()}/bookmark")

        # Assert
        assert response.status_code == 401


class TestRecommendationEndpoints:
    """End-to-end tests for /recommendations."""

    def test_recommendations_require_authentication(self, client):
        # Act
        response = client.get("/recommendations/ideas")

        # Assert
        assert response.status_code == 401

    def test_recommendations_for_unknown_user_is_404(self, authed_client):
        # Act
        response = authed_client.get("/recommendations/ideas")

        # Assert
        assert response.status_code == 404
        assert response.json()["kind"] == "NOT_FOUND"

    def test_recommendations_filter_by_time_commitment(self, client, seed):
        # Arrange
        reader = make_user()
        author = make_user()
        quick = make_idea(
            author, title="Weekend CLI", time_commitment=TimeCommitment.QUICK
        )
        long = make_idea(
            author, title="Compiler", time_commitment=TimeCommitment.LONG
        )
        own = make_idea(
            reader, title="Mine", time_commitment=TimeCommitment.QUICK
        )
        seed(users=[reader, author], ideas=[quick, long, own])
        login(client, reader.id, reader.username)

        # Act
        response = client.get(
            "/recommendations/ideas", params={"timeCommitment": "QUICK"}
        )

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert [r["title"] for r in data["recommendations"]] == ["Weekend CLI"]
        assert data["criteria"]["time_commitment"] == ["QUICK"]

    def test_recommendations_unfiltered(self, client, seed):
        # Arrange
        reader = make_user()
        author = make_user(karma_score=500)
        ideas = [
            make_idea(
                author, title="Weekend CLI", time_commitment=TimeCommitment.QUICK
            ),
            make_idea(
                author, title="Compiler", time_commitment=TimeCommitment.LONG
            ),
        ]
        seed(users=[reader, author], ideas=ideas)
        login(client, reader.id, reader.username)

        # Act
        response = client.get("/recommendations/ideas")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert {r["title"] for r in data["recommendations"]} == {
            "Weekend CLI",
            "Compiler",
        }
        assert all(r["author_karma"] == 500 for r in data["recommendations"])

    def test_trending_defaults_to_daily(self, client, seed):
        # Arrange
        seed(ideas=[make_idea(tags=["llm"])])

        # Act
        response = client.get("/recommendations/trending")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["period"] == "DAILY"
        assert data["topics"]["tags"] == [{"tag": "llm", "count": 1}]

    def test_trending_is_public(self, client):
        # Act
        response = client.get(
            "/recommendations/trending", params={"period": "DAILY", "category": "WEB"}
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "topics": {"tags": [], "categories": []},
            "ideas": [],
            "period": "DAILY",
            "category": "WEB",
        }

    def test_trending_limit_out_of_range_is_400(self, client):
        # Act
        response = client.get("/recommendations/trending", params={"limit": 0})

        # Assert
        assert response.status_code == 400
        assert response.json()["kind"] == "INVALID_ARGUMENT"


class TestPreferenceEndpoints:
    """End-to-end tests for /preferences."""

    def test_options_are_public(self, client):
        # Act
        response = client.get("/preferences/options")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert "WEB" in data["categories"]
        assert data["difficulty_levels"] == [
            "BEGINNER",
            "INTERMEDIATE",
            "ADVANCED",
            "EXPERT",
        ]

    def test_get_preferences_returns_defaults(self, authed_client):
        # Act
        response = authed_client.get("/preferences")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["enable_recommendations"] is True
        assert data["preferred_categories"] == []

    def test_update_preferences(self, authed_client):
        # Act
        response = authed_client.put(
            "/preferences",
            json={"preferred_categories": ["AI_ML"], "enable_trending": False}
        )

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["preferred_categories"] == ["AI_ML"]
        assert data["enable_trending"] is False
        assert data["message"] == "Preferences updated successfully"

    def test_update_preferences_rejects_unknown_category(self, authed_client):
        # Act
        response = authed_client.put(
            "/preferences",
            json={"preferred_categories": ["TIME_TRAVEL"]}
        )

        # Assert
        assert response.status_code == 400

    def test_preferences_require_authentication(self, client):
        # Act
        response = client.delete("/preferences")

        # Assert
        assert response.status_code == 401


class TestHealth:
    def test_health(self, client):
        # Act
        response = client.get("/health")

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
