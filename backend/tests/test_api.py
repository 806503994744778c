"""
Townhall Backend — API Integration Tests
==========================================

What:  End-to-end requests through the real app (routes, auth, services,
       repositories) against an in-memory SQLite database.

What we test:
    ✅ User lifecycle: create → search → delete → 404
    ✅ Writes need HTTP Basic credentials; reads do not
    ✅ Malformed payloads → 400 with field details
    ✅ Discussions with hashtags, filters and text search
    ✅ Comments and likes, including the duplicate-like 409
    ✅ Cascading user delete
    ✅ X-Total-Count and pagination, /health
"""

import pytest

from conftest import ADMIN


async def create_user(client, name="Ana", email="ana@x.com", mobile_no="555"):
    response = await client.post(
        "/api/users",
        json={"name": name, "mobileNo": mobile_no, "email": email},
        auth=ADMIN,
    )
    assert response.status_code == 200, response.text
    return response.json()


async def create_discussion(client, user_id, text="Hello", hashtags=()):
    response = await client.post(
        "/api/discussions",
        json={"userId": user_id, "text": text, "hashtags": list(hashtags)},
        auth=ADMIN,
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestUsers:
    @pytest.mark.asyncio
    async def test_user_lifecycle(self, test_client):
        created = await create_user(test_client)
        assert created == {
            "id": created["id"],
            "name": "Ana",
            "mobileNo": "555",
            "email": "ana@x.com",
        }

        response = await test_client.get("/api/users/search", params={"name": "an"})
        assert response.status_code == 200
        assert [u["id"] for u in response.json()] == [created["id"]]

        response = await test_client.delete(f"/api/users/{created['id']}", auth=ADMIN)
        assert response.status_code == 200
        assert response.json() == {"message": "User deleted", "id": created["id"]}

        response = await test_client.get(f"/api/users/{created['id']}")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_update_overwrites_fields(self, test_client):
        created = await create_user(test_client)

        response = await test_client.put(
            f"/api/users/{created['id']}",
            json={"name": "Ana Maria", "mobileNo": "556", "email": "AM@x.com"},
            auth=ADMIN,
        )

        assert response.status_code == 200
        assert response.json() == {
            "id": created["id"],
            "name": "Ana Maria",
            "mobileNo": "556",
            "email": "AM@x.com",
        }

    @pytest.mark.asyncio
    async def test_duplicate_email_conflict(self, test_client):
        await create_user(test_client)

        response = await test_client.post(
            "/api/users",
            json={"name": "Bo", "mobileNo": "777", "email": "ana@x.com"},
            auth=ADMIN,
        )

        assert response.status_code == 409
        assert response.json()["details"]["field"] == "email"

    @pytest.mark.asyncio
    async def test_email_kept_as_sent(self, test_client):
        created = await create_user(test_client, email="Ana@X.com")

        response = await test_client.get(f"/api/users/{created['id']}")

        assert created["email"] == "Ana@X.com"
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_email_conflict_ignores_case(self, test_client):
        await create_user(test_client, email="Ana@X.com")

        response = await test_client.post(
            "/api/users",
            json={"name": "Bo", "mobileNo": "777", "email": "ana@x.COM"},
            auth=ADMIN,
        )

        assert response.status_code == 409
        assert response.json()["details"]["field"] == "email"

    @pytest.mark.asyncio
    async def test_search_folds_accented_names(self, test_client):
        created = await create_user(test_client, name="Émile Zola")

        for term in ("émile", "ÉMILE"):
            response = await test_client.get("/api/users/search", params={"name": term})
            assert [u["id"] for u in response.json()] == [created["id"]]

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, test_client):
        response = await test_client.delete("/api/users/999", auth=ADMIN)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_total_and_pagination(self, test_client):
        for i in range(3):
            await create_user(test_client, f"User {i}", f"u{i}@x.com", f"10{i}")

        response = await test_client.get("/api/users", params={"limit": 2, "offset": 1})

        assert response.status_code == 200
        assert response.headers["X-Total-Count"] == "3"
        assert [u["name"] for u in response.json()] == ["User 1", "User 2"]


class TestAuthAndValidation:
    @pytest.mark.asyncio
    async def test_write_without_credentials(self, test_client):
        response = await test_client.post(
            "/api/users", json={"name": "Ana", "mobileNo": "555", "email": "ana@x.com"}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"].startswith("Basic")
        assert response.json()["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_write_with_wrong_password(self, test_client):
        response = await test_client.delete("/api/users/1", auth=("admin", "nope"))
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username or password"

    @pytest.mark.asyncio
    async def test_reads_are_public(self, test_client):
        response = await test_client.get("/api/discussions")
        assert response.status_code == 200
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "0"

    @pytest.mark.asyncio
    async def test_malformed_payload(self, test_client):
        response = await test_client.post(
            "/api/users", json={"name": "Ana", "email": "not-an-email"}, auth=ADMIN
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        fields = {e["field"] for e in body["details"]["errors"]}
        assert {"mobileNo", "email"} <= fields

    @pytest.mark.asyncio
    async def test_invalid_hashtag(self, test_client):
        user = await create_user(test_client)

        response = await test_client.post(
            "/api/discussions",
            json={"userId": user["id"], "text": "Hi", "hashtags": ["no spaces"]},
            auth=ADMIN,
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "hashtags"

    @pytest.mark.asyncio
    async def test_limit_above_maximum(self, test_client):
        response = await test_client.get("/api/users", params={"limit": 100000})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_basic_header(self, test_client):
        """A Basic header that does not decode is reported like missing credentials."""
        response = await test_client.post(
            "/api/hashtags",
            json={"name": "news"},
            headers={"Authorization": "Basic !!!"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_hashtag_search_needs_a_term(self, test_client):
        response = await test_client.get("/api/hashtags/search", params={"name": "#"})

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "name"


class TestDiscussions:
    @pytest.mark.asyncio
    async def test_create_with_unknown_user(self, test_client):
        response = await test_client.post(
            "/api/discussions", json={"userId": 42, "text": "Hi"}, auth=ADMIN
        )

        assert response.status_code == 404
        assert response.json()["details"] == {"resource": "user", "resource_id": 42}

    @pytest.mark.asyncio
    async def test_hashtags_and_filters(self, test_client):
        ana = await create_user(test_client)
        bo = await create_user(test_client, "Bo", "bo@x.com", "777")
        first = await create_discussion(
            test_client, ana["id"], "Learning Python", ["#Python", "beginners"]
        )
        await create_discussion(test_client, bo["id"], "Weekend plans", ["life"])

        assert first["hashtags"] == ["beginners", "python"]
        assert first["commentCount"] == 0
        assert first["likeCount"] == 0

        response = await test_client.get("/api/discussions", params={"hashtag": "#PYTHON"})
        assert [d["id"] for d in response.json()] == [first["id"]]

        response = await test_client.get("/api/discussions", params={"userId": bo["id"]})
        assert [d["text"] for d in response.json()] == ["Weekend plans"]

        response = await test_client.get("/api/discussions/search", params={"text": "PYTHON"})
        assert [d["id"] for d in response.json()] == [first["id"]]

        response = await test_client.get("/api/hashtags")
        assert [h["name"] for h in response.json()] == ["beginners", "life", "python"]

    @pytest.mark.asyncio
    async def test_update_replaces_hashtags(self, test_client):
        ana = await create_user(test_client)
        created = await create_discussion(test_client, ana["id"], "Draft", ["one", "two"])

        response = await test_client.put(
            f"/api/discussions/{created['id']}",
            json={"text": "Final", "hashtags": ["two", "three"]},
            auth=ADMIN,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["text"] == "Final"
        assert body["hashtags"] == ["three", "two"]
        assert body["userId"] == ana["id"]


class TestCommentsAndLikes:
    @pytest.mark.asyncio
    async def test_comment_and_like_counts(self, test_client):
        ana = await create_user(test_client)
        bo = await create_user(test_client, "Bo", "bo@x.com", "777")
        discussion = await create_discussion(test_client, ana["id"])

        response = await test_client.post(
            "/api/comments",
            json={"userId": bo["id"], "discussionId": discussion["id"], "text": "Nice"},
            auth=ADMIN,
        )
        assert response.status_code == 200
        comment = response.json()
        assert comment["text"] == "Nice"

        response = await test_client.post(
            "/api/likes",
            json={"userId": bo["id"], "discussionId": discussion["id"]},
            auth=ADMIN,
        )
        assert response.status_code == 200

        response = await test_client.get(f"/api/discussions/{discussion['id']}")
        body = response.json()
        assert body["commentCount"] == 1
        assert body["likeCount"] == 1

        response = await test_client.get(f"/api/discussions/{discussion['id']}/comments")
        assert [c["id"] for c in response.json()] == [comment["id"]]

    @pytest.mark.asyncio
    async def test_duplicate_like_conflicts(self, test_client):
        ana = await create_user(test_client)
        discussion = await create_discussion(test_client, ana["id"])
        payload = {"userId": ana["id"], "discussionId": discussion["id"]}

        first = await test_client.post("/api/likes", json=payload, auth=ADMIN)
        second = await test_client.post("/api/likes", json=payload, auth=ADMIN)

        assert first.status_code == 200
        assert second.status_code == 409
        assert second.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_comment_on_missing_discussion(self, test_client):
        ana = await create_user(test_client)

        response = await test_client.post(
            "/api/comments",
            json={"userId": ana["id"], "discussionId": 999, "text": "Hi"},
            auth=ADMIN,
        )

        assert response.status_code == 404


class TestCascadeDelete:
    @pytest.mark.asyncio
    async def test_user_delete_removes_owned_records(self, test_client):
        ana = await create_user(test_client)
        bo = await create_user(test_client, "Bo", "bo@x.com", "777")
        ana_post = await create_discussion(test_client, ana["id"], "Ana's post", ["python"])
        bo_post = await create_discussion(test_client, bo["id"], "Bo's post")
        await test_client.post(
            "/api/comments",
            json={"userId": bo["id"], "discussionId": ana_post["id"], "text": "on Ana's"},
            auth=ADMIN,
        )
        await test_client.post(
            "/api/comments",
            json={"userId": ana["id"], "discussionId": bo_post["id"], "text": "by Ana"},
            auth=ADMIN,
        )
        await test_client.post(
            "/api/likes",
            json={"userId": ana["id"], "discussionId": bo_post["id"]},
            auth=ADMIN,
        )

        response = await test_client.delete(f"/api/users/{ana['id']}", auth=ADMIN)
        assert response.status_code == 200

        response = await test_client.get(f"/api/discussions/{ana_post['id']}")
        assert response.status_code == 404

        response = await test_client.get(f"/api/discussions/{bo_post['id']}")
        body = response.json()
        assert body["commentCount"] == 0
        assert body["likeCount"] == 0

        response = await test_client.get("/api/comments")
        assert response.json() == []

        # hashtags outlive their discussions
        response = await test_client.get("/api/hashtags/search", params={"name": "py"})
        assert [h["name"] for h in response.json()] == ["python"]


class TestTimestamps:
    @pytest.mark.asyncio
    async def test_created_at_survives_reload(self, test_client):
        """createdAt reads back as the same UTC instant it was written with."""
        ana = await create_user(test_client)
        discussion = await create_discussion(test_client, ana["id"])
        comment = (
            await test_client.post(
                "/api/comments",
                json={"userId": ana["id"], "discussionId": discussion["id"], "text": "Hi"},
                auth=ADMIN,
            )
        ).json()
        like = (
            await test_client.post(
                "/api/likes",
                json={"userId": ana["id"], "discussionId": discussion["id"]},
                auth=ADMIN,
            )
        ).json()

        fetched_discussion = (await test_client.get(f"/api/discussions/{discussion['id']}")).json()
        fetched_comment = (await test_client.get(f"/api/comments/{comment['id']}")).json()
        fetched_like = (await test_client.get(f"/api/likes/{like['id']}")).json()

        assert fetched_discussion["createdAt"] == discussion["createdAt"]
        assert fetched_comment["createdAt"] == comment["createdAt"]
        assert fetched_like["createdAt"] == like["createdAt"]
        assert discussion["createdAt"].endswith("Z")


class TestDiscussionDelete:
    @pytest.mark.asyncio
    async def test_removes_comments_likes_and_links(self, test_client):
        ana = await create_user(test_client)
        bo = await create_user(test_client, "Bo", "bo@x.com", "777")
        doomed = await create_discussion(test_client, ana["id"], "Going away", ["python"])
        kept = await create_discussion(test_client, bo["id"], "Staying", ["python"])
        await test_client.post(
            "/api/comments",
            json={"userId": bo["id"], "discussionId": doomed["id"], "text": "bye"},
            auth=ADMIN,
        )
        await test_client.post(
            "/api/likes",
            json={"userId": bo["id"], "discussionId": doomed["id"]},
            auth=ADMIN,
        )

        response = await test_client.delete(f"/api/discussions/{doomed['id']}", auth=ADMIN)
        assert response.status_code == 200
        assert response.json() == {"message": "Discussion deleted", "id": doomed["id"]}

        assert (await test_client.get(f"/api/discussions/{doomed['id']}")).status_code == 404
        response = await test_client.get("/api/comments", params={"discussionId": doomed["id"]})
        assert response.json() == []
        response = await test_client.get("/api/likes", params={"discussionId": doomed["id"]})
        assert response.json() == []

        response = await test_client.get("/api/discussions", params={"hashtag": "python"})
        assert [d["id"] for d in response.json()] == [kept["id"]]
        response = await test_client.get("/api/hashtags/search", params={"name": "python"})
        assert [h["name"] for h in response.json()] == ["python"]


class TestHashtagWrites:
    @pytest.mark.asyncio
    async def test_rename_and_delete(self, test_client):
        ana = await create_user(test_client)
        discussion = await create_discussion(test_client, ana["id"], "Today", ["news", "tech"])
        news = (await test_client.get("/api/hashtags/search", params={"name": "news"})).json()[0]

        response = await test_client.put(
            f"/api/hashtags/{news['id']}", json={"name": "#Headlines"}, auth=ADMIN
        )
        assert response.status_code == 200
        assert response.json() == {"id": news["id"], "name": "headlines"}

        body = (await test_client.get(f"/api/discussions/{discussion['id']}")).json()
        assert body["hashtags"] == ["headlines", "tech"]

        response = await test_client.delete(f"/api/hashtags/{news['id']}", auth=ADMIN)
        assert response.status_code == 200
        assert response.json() == {"message": "Hashtag deleted", "id": news["id"]}

        assert (await test_client.get(f"/api/hashtags/{news['id']}")).status_code == 404
        body = (await test_client.get(f"/api/discussions/{discussion['id']}")).json()
        assert body["hashtags"] == ["tech"]

    @pytest.mark.asyncio
    async def test_rename_to_taken_name(self, test_client):
        first = (await test_client.post("/api/hashtags", json={"name": "a"}, auth=ADMIN)).json()
        await test_client.post("/api/hashtags", json={"name": "b"}, auth=ADMIN)

        response = await test_client.put(
            f"/api/hashtags/{first['id']}", json={"name": "B"}, auth=ADMIN
        )

        assert response.status_code == 409


class TestCommentAndLikeWrites:
    @pytest.mark.asyncio
    async def test_edit_and_delete_comment(self, test_client):
        ana = await create_user(test_client)
        discussion = await create_discussion(test_client, ana["id"])
        comment = (
            await test_client.post(
                "/api/comments",
                json={"userId": ana["id"], "discussionId": discussion["id"], "text": "Frist"},
                auth=ADMIN,
            )
        ).json()

        response = await test_client.put(
            f"/api/comments/{comment['id']}", json={"text": "First"}, auth=ADMIN
        )
        assert response.status_code == 200
        assert response.json() == {**comment, "text": "First"}

        response = await test_client.delete(f"/api/comments/{comment['id']}", auth=ADMIN)
        assert response.json() == {"message": "Comment deleted", "id": comment["id"]}
        assert (await test_client.get(f"/api/comments/{comment['id']}")).status_code == 404

        body = (await test_client.get(f"/api/discussions/{discussion['id']}")).json()
        assert body["commentCount"] == 0

    @pytest.mark.asyncio
    async def test_unlike_then_like_again(self, test_client):
        ana = await create_user(test_client)
        discussion = await create_discussion(test_client, ana["id"])
        payload = {"userId": ana["id"], "discussionId": discussion["id"]}
        like = (await test_client.post("/api/likes", json=payload, auth=ADMIN)).json()

        response = await test_client.delete(f"/api/likes/{like['id']}", auth=ADMIN)
        assert response.json() == {"message": "Like deleted", "id": like["id"]}
        assert (await test_client.get(f"/api/likes/{like['id']}")).status_code == 404
        assert (await test_client.delete(f"/api/likes/{like['id']}", auth=ADMIN)).status_code == 404

        response = await test_client.post("/api/likes", json=payload, auth=ADMIN)
        assert response.status_code == 200
        body = (await test_client.get(f"/api/discussions/{discussion['id']}")).json()
        assert body["likeCount"] == 1


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"
