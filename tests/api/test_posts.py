"""HTTP tests for /api/v1/posts (PostService over in-memory fakes)."""

from datetime import timedelta

from httpx import AsyncClient

from app.infrastructure.security.jwt import create_access_token

BASE = "/api/v1/posts"


async def _create(client: AsyncClient, headers: dict, content: str = "hello", category: str = "tech", **extra) -> dict:
    response = await client.post(
        BASE,
        data={"content": content, "category": category, **extra},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreate:
    async def test_create_returns_post(self, client: AsyncClient, alice_headers) -> None:
        response = await client.post(
            BASE,
            data={"content": "hello", "category": "tech", "tags": ["a", "b"]},
            headers=alice_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Post created successfully"
        post = body["data"]
        assert post["content"] == "hello"
        assert post["tags"] == ["a", "b"]
        assert post["author"] == {
            "id": "alice",
            "username": "alice",
            "fullname": "Alice A",
            "profilePicture": None,
        }
        assert set(post["category"]) == {"id", "name"}
        assert post["category"]["name"] == "tech"
        assert "createdAt" in post and "updatedAt" in post

    async def test_create_with_image(self, client: AsyncClient, alice_headers, storage) -> None:
        response = await client.post(
            BASE,
            data={"content": "look", "category": "pets"},
            files={"image": ("cat.png", b"\x89PNG", "image/png")},
            headers=alice_headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["image"] == "https://cdn.test/posts/alice/cat.png"
        assert storage.uploads == [("cat.png", "image/png", "alice")]

    async def test_unauthenticated(self, client: AsyncClient) -> None:
        response = await client.post(BASE, data={"content": "x", "category": "y"})
        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "AUTHENTICATION_ERROR"

    async def test_expired_token(self, client: AsyncClient) -> None:
        token = create_access_token({"sub": "alice"}, expires_delta=timedelta(seconds=-5))
        response = await client.post(
            BASE,
            data={"content": "x", "category": "y"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 401

    async def test_subject_with_separator_is_rejected(self, client: AsyncClient, cache) -> None:
        response = await client.post(
            BASE,
            data={"content": "x", "category": "y"},
            headers={"Authorization": f"Bearer {create_access_token({'sub': 'auth0:123'})}"},
        )
        assert response.status_code == 401
        assert cache.deleted == []

    async def test_empty_content(self, client: AsyncClient, alice_headers) -> None:
        response = await client.post(BASE, data={"content": " ", "category": "y"}, headers=alice_headers)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"] == {"field": "content"}

    async def test_missing_category(self, client: AsyncClient, alice_headers) -> None:
        response = await client.post(BASE, data={"content": "x"}, headers=alice_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Category is required"

    async def test_upload_failure_is_500(self, client: AsyncClient, alice_headers, storage) -> None:
        from app.infrastructure.exceptions import StorageUploadError

        storage.fail_with = StorageUploadError("posts/alice/cat.png", "timeout")
        response = await client.post(
            BASE,
            data={"content": "look", "category": "pets"},
            files={"image": ("cat.png", b"\x89PNG", "image/png")},
            headers=alice_headers,
        )
        assert response.status_code == 500
        assert response.json()["message"] == "Failed to upload image: timeout"


class TestRead:
    async def test_list_newest_first(self, client: AsyncClient, alice_headers, bob_headers) -> None:
        first = await _create(client, alice_headers, "one")
        second = await _create(client, bob_headers, "two")

        response = await client.get(BASE)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "All posts retrieved successfully"
        assert [p["id"] for p in body["data"]] == [second["id"], first["id"]]

    async def test_list_is_cached(self, client: AsyncClient, alice_headers, post_repo, cache) -> None:
        await _create(client, alice_headers)
        await client.get(BASE)
        await client.get(BASE)
        assert post_repo.list_calls == 1
        assert cache.store["posts:all"]["version"] == 1

    async def test_get_post(self, client: AsyncClient, alice_headers) -> None:
        created = await _create(client, alice_headers)
        response = await client.get(f"{BASE}/{created['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["post"]["id"] == created["id"]

    async def test_get_missing_post(self, client: AsyncClient) -> None:
        response = await client.get(f"{BASE}/cmissing000000000000000000")
        assert response.status_code == 404
        assert response.json()["error"] == "RESOURCE_NOT_FOUND"

    async def test_by_category(self, client: AsyncClient, alice_headers) -> None:
        created = await _create(client, alice_headers, category="food")
        await _create(client, alice_headers, category="tech")
        response = await client.get(f"{BASE}/category/{created['category']['id']}")
        assert response.status_code == 200
        posts = response.json()["data"]["posts"]
        assert [p["id"] for p in posts] == [created["id"]]

    async def test_by_unknown_category(self, client: AsyncClient) -> None:
        response = await client.get(f"{BASE}/category/nothing")
        assert response.status_code == 404

    async def test_by_user(self, client: AsyncClient, alice_headers, bob_headers) -> None:
        mine = await _create(client, alice_headers)
        await _create(client, bob_headers)
        response = await client.get(f"{BASE}/user/alice")
        assert response.status_code == 200
        assert [p["id"] for p in response.json()["data"]] == [mine["id"]]

    async def test_by_blank_user_is_400(self, client: AsyncClient) -> None:
        response = await client.get(f"{BASE}/user/%20")
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"]["field"] == "user_id"


class TestUpdate:
    async def test_author_updates(self, client: AsyncClient, alice_headers) -> None:
        created = await _create(client, alice_headers)
        response = await client.put(
            f"{BASE}/{created['id']}", json={"content": "edited"}, headers=alice_headers
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Post updated successfully"
        assert body["data"]["post"]["content"] == "edited"

        listing = (await client.get(BASE)).json()["data"]
        assert listing[0]["content"] == "edited"

    async def test_other_user_forbidden(self, client: AsyncClient, alice_headers, bob_headers) -> None:
        created = await _create(client, alice_headers)
        response = await client.put(
            f"{BASE}/{created['id']}", json={"content": "mine now"}, headers=bob_headers
        )
        assert response.status_code == 403
        assert response.json()["message"] == "You are not authorized to update this post"

    async def test_missing_body_field(self, client: AsyncClient, alice_headers) -> None:
        created = await _create(client, alice_headers)
        response = await client.put(f"{BASE}/{created['id']}", json={}, headers=alice_headers)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert "content" in body["details"]["fields"]

    async def test_unauthenticated(self, client: AsyncClient) -> None:
        response = await client.put(f"{BASE}/abc", json={"content": "x"})
        assert response.status_code == 401

    async def test_missing_post(self, client: AsyncClient, alice_headers) -> None:
        response = await client.put(
            f"{BASE}/cmissing000000000000000000", json={"content": "x"}, headers=alice_headers
        )
        assert response.status_code == 404


class TestDelete:
    async def test_author_deletes(self, client: AsyncClient, alice_headers) -> None:
        created = await _create(client, alice_headers)
        await client.get(BASE)

        response = await client.delete(f"{BASE}/{created['id']}", headers=alice_headers)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "deletedPostId": created["id"],
            "message": "Post deleted successfully",
        }
        assert (await client.get(BASE)).json()["data"] == []

    async def test_invalid_id(self, client: AsyncClient, alice_headers) -> None:
        response = await client.delete(f"{BASE}/NOT-AN-ID", headers=alice_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid post ID"

    async def test_other_user_forbidden(self, client: AsyncClient, alice_headers, bob_headers) -> None:
        created = await _create(client, alice_headers)
        response = await client.delete(f"{BASE}/{created['id']}", headers=bob_headers)
        assert response.status_code == 403

    async def test_missing_post(self, client: AsyncClient, alice_headers) -> None:
        response = await client.delete(f"{BASE}/cmissing000000000000000000", headers=alice_headers)
        assert response.status_code == 404


async def test_store_unavailable_is_503(client: AsyncClient, post_repo) -> None:
    from app.domain.exceptions import StoreUnavailableException

    post_repo.fail_with = StoreUnavailableException("runQuery")
    response = await client.get(BASE)
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"


async def test_oversized_body_rejected(client: AsyncClient, alice_headers) -> None:
    from app.core.config import get_settings

    too_big = b"x" * (get_settings().max_upload_size + 2 * 1024 * 1024)
    response = await client.post(
        BASE,
        data={"content": "x", "category": "y"},
        files={"image": ("big.png", too_big, "image/png")},
        headers=alice_headers,
    )
    assert response.status_code == 413
