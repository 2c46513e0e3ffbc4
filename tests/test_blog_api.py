"""Tests for the blog post and comment endpoints."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from src.main import create_app
from src.storage import IStorage
from tests.conftest import BUCKET


def create_post(client, **overrides):
    payload = {"title": "A post", "content": "Some words here", **overrides}
    response = client.post("/api/blog-posts", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestListPosts:
    def test_lists_all_newest_first(self, client):
        first = create_post(client, title="First")
        second = create_post(client, title="Second", published=True)

        response = client.get("/api/blog-posts")

        assert response.status_code == 200
        assert [post["id"] for post in response.json()] == [second["id"], first["id"]]

    def test_published_filter(self, client):
        create_post(client, title="Draft")
        live = create_post(client, title="Live", published=True)

        published = client.get("/api/blog-posts", params={"published": "true"}).json()
        drafts = client.get("/api/blog-posts", params={"published": "false"}).json()

        assert [post["id"] for post in published] == [live["id"]]
        assert all(not post["published"] for post in drafts)
        assert len(drafts) == 1

    def test_unrecognized_published_value_means_no_filter(self, client):
        create_post(client, title="Draft")
        create_post(client, title="Live", published=True)

        response = client.get("/api/blog-posts", params={"published": "yes"})

        assert len(response.json()) == 2

    def test_limit_and_offset(self, client):
        created = [create_post(client, title=f"Post {i}") for i in range(5)]

        response = client.get("/api/blog-posts", params={"limit": 2, "offset": 1})

        assert [post["id"] for post in response.json()] == [created[3]["id"], created[2]["id"]]

    @pytest.mark.parametrize(
        "params", [{"limit": 0}, {"limit": "abc"}, {"limit": -2}, {"offset": -1}, {"offset": "x"}]
    )
    def test_unusable_pagination_is_ignored(self, client, params):
        created = [create_post(client, title=f"Post {i}") for i in range(3)]

        response = client.get("/api/blog-posts", params=params)

        assert response.status_code == 200
        assert len(response.json()) == len(created)

    def test_search_matches_tags(self, client):
        tagged = create_post(client, title="Notes", content="Plain text", tags=["JavaScript"])
        create_post(client, title="Other", content="Unrelated")

        response = client.get("/api/blog-posts", params={"search": "java"})

        assert [post["id"] for post in response.json()] == [tagged["id"]]

    def test_search_respects_published_filter_when_given(self, client):
        create_post(client, title="Python draft")
        live = create_post(client, title="Python live", published=True)

        everything = client.get("/api/blog-posts", params={"search": "python"}).json()
        published = client.get("/api/blog-posts", params={"search": "python", "published": "true"}).json()

        assert len(everything) == 2
        assert [post["id"] for post in published] == [live["id"]]

    def test_empty_search_lists_posts(self, client):
        create_post(client)
        response = client.get("/api/blog-posts", params={"search": ""})
        assert len(response.json()) == 1

    def test_store_failure_is_500(self, object_storage, mailer):
        storage = MagicMock(spec=IStorage)
        storage.list_posts.side_effect = RuntimeError("database is gone")
        client = TestClient(create_app(storage=storage, object_storage=object_storage, mailer=mailer))

        response = client.get("/api/blog-posts")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to fetch blog posts"}


class TestGetPost:
    def test_fetch_by_slug_counts_views(self, client):
        post = create_post(client, title="Hello, World! 2024")

        first = client.get("/api/blog-posts/hello-world-2024")
        second = client.get("/api/blog-posts/hello-world-2024")

        assert first.status_code == 200
        assert first.json()["metadata"]["views"] == post["metadata"]["views"] + 1
        assert second.json()["metadata"]["views"] == post["metadata"]["views"] + 2

    def test_fetch_by_id(self, client):
        post = create_post(client)

        response = client.get(f"/api/blog-posts/{post['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == post["id"]

    def test_missing_post_is_404(self, client):
        response = client.get("/api/blog-posts/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"detail": "Blog post not found"}


class TestCreatePost:
    def test_returns_camel_case_record(self, client):
        body = create_post(
            client,
            title="Hello, World! 2024",
            content=" ".join(["word"] * 250),
            featuredImage="https://images.example.com/cover.jpg",
            tags=["Python"],
        )

        assert body["slug"] == "hello-world-2024"
        assert body["featuredImage"] == "https://images.example.com/cover.jpg"
        assert body["createdAt"] == body["updatedAt"]
        assert body["metadata"] == {"readTime": 2, "views": 0, "author": "Alex Shyaka"}
        assert body["excerpt"] is None
        assert body["published"] is False

    def test_missing_title_is_400(self, client):
        response = client.post("/api/blog-posts", json={"content": "Body"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request data"
        assert any(error["loc"][-1] == "title" for error in response.json()["errors"])

    def test_malformed_slug_is_400(self, client):
        response = client.post(
            "/api/blog-posts", json={"title": "T", "content": "Body", "slug": "Bad Slug"}
        )
        assert response.status_code == 400

    def test_ignores_caller_supplied_id(self, client):
        body = create_post(client, id="chosen-by-client")
        assert body["id"] != "chosen-by-client"


class TestUpdatePost:
    def test_partial_update(self, client):
        post = create_post(client, tags=["a"], metadata={"author": "Alex"})

        response = client.put(f"/api/blog-posts/{post['id']}", json={"title": "New"})

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "New"
        assert body["content"] == post["content"]
        assert body["tags"] == ["a"]
        assert body["metadata"] == post["metadata"]
        assert body["createdAt"] == post["createdAt"]
        assert body["updatedAt"] > post["updatedAt"]

    def test_missing_post_is_404(self, client):
        response = client.put("/api/blog-posts/missing", json={"title": "New"})
        assert response.status_code == 404

    def test_invalid_data_is_400(self, client):
        post = create_post(client)
        response = client.put(f"/api/blog-posts/{post['id']}", json={"title": ""})
        assert response.status_code == 400


class TestDeletePost:
    def test_delete_then_404(self, client):
        post = create_post(client)

        deleted = client.delete(f"/api/blog-posts/{post['id']}")
        again = client.delete(f"/api/blog-posts/{post['id']}")

        assert deleted.status_code == 204
        assert deleted.content == b""
        assert again.status_code == 404
        assert client.get(f"/api/blog-posts/{post['id']}").status_code == 404


class TestFeaturedImage:
    def test_normalizes_upload_url(self, client):
        post = create_post(client)
        upload_url = (
            f"https://{BUCKET}.s3.amazonaws.com/.private/uploads/abc-123"
            "?X-Amz-Algorithm=AWS4-HMAC-SHA256&X-Amz-Expires=900"
        )

        response = client.put(
            f"/api/blog-posts/{post['id']}/featured-image", json={"imageURL": upload_url}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["objectPath"] == "/objects/uploads/abc-123"
        assert body["post"]["featuredImage"] == "/objects/uploads/abc-123"

    def test_external_url_is_kept(self, client):
        post = create_post(client)
        url = "https://images.unsplash.com/photo.jpg"

        response = client.put(f"/api/blog-posts/{post['id']}/featured-image", json={"imageURL": url})

        assert response.json()["objectPath"] == url

    def test_missing_image_url_is_400(self, client):
        post = create_post(client)

        response = client.put(f"/api/blog-posts/{post['id']}/featured-image", json={})

        assert response.status_code == 400
        assert response.json() == {"detail": "imageURL is required"}

    def test_missing_post_is_404(self, client):
        response = client.put(
            "/api/blog-posts/missing/featured-image", json={"imageURL": "https://x.test/a.png"}
        )
        assert response.status_code == 404


class TestComments:
    def test_create_and_list_oldest_first(self, client):
        post = create_post(client)
        url = f"/api/blog-posts/{post['id']}/comments"

        first = client.post(url, json={"author": "Ann", "email": "ann@example.com", "content": "First"})
        second = client.post(url, json={"author": "Bob", "email": "bob@example.com", "content": "Second"})

        assert first.status_code == 201
        assert first.json()["postId"] == post["id"]
        assert "createdAt" in first.json()

        listed = client.get(url).json()
        assert [comment["id"] for comment in listed] == [first.json()["id"], second.json()["id"]]

    def test_path_post_id_overrides_body(self, client):
        response = client.post(
            "/api/blog-posts/p1/comments",
            json={"postId": "p2", "author": "Ann", "email": "ann@example.com", "content": "Hi"},
        )
        assert response.json()["postId"] == "p1"

    def test_invalid_comment_is_400(self, client):
        response = client.post("/api/blog-posts/p1/comments", json={"author": "Ann"})

        assert response.status_code == 400
        fields = {error["loc"][-1] for error in response.json()["errors"]}
        assert {"email", "content"} <= fields

    def test_no_comments_is_empty_list(self, client):
        response = client.get("/api/blog-posts/p1/comments")

        assert response.status_code == 200
        assert response.json() == []


class TestStoreFailures:
    @pytest.fixture
    def failing_storage(self):
        storage = MagicMock(spec=IStorage)
        error = RuntimeError("database is gone")
        storage.create_post.side_effect = error
        storage.update_post.side_effect = error
        storage.create_comment.side_effect = error
        storage.get_comments_by_post_id.side_effect = error
        storage.fetch_and_record_view.side_effect = error
        return storage

    @pytest.fixture
    def failing_client(self, failing_storage, object_storage, mailer):
        return TestClient(create_app(storage=failing_storage, object_storage=object_storage, mailer=mailer))

    def test_create_is_500(self, failing_client):
        response = failing_client.post("/api/blog-posts", json={"title": "T", "content": "Body"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to create blog post"}

    def test_update_is_500(self, failing_client):
        response = failing_client.put("/api/blog-posts/p1", json={"title": "New"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to update blog post"}

    def test_featured_image_is_500(self, failing_client):
        response = failing_client.put(
            "/api/blog-posts/p1/featured-image", json={"imageURL": "https://x.test/a.png"}
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}

    def test_get_post_is_500(self, failing_client):
        response = failing_client.get("/api/blog-posts/p1")
        assert response.status_code == 500

    def test_comments_are_500(self, failing_client):
        listed = failing_client.get("/api/blog-posts/p1/comments")
        created = failing_client.post(
            "/api/blog-posts/p1/comments",
            json={"author": "Ann", "email": "ann@example.com", "content": "Hi"},
        )

        assert listed.status_code == 500
        assert created.status_code == 500
        assert created.json() == {"detail": "Failed to create comment"}
