# tests/v1/test_comments.py
"""Tests for comment endpoints."""

from fastapi import status


def _comment(client, post_id, headers, text="Nice post"):
    return client.post(f"/api/posts/{post_id}/comments", json={"text": text}, headers=headers)


def test_add_comment(client, test_post, other_user, other_auth_token) -> None:
    response = _comment(client, test_post.id, other_auth_token, "  Great!  ")
    assert response.status_code == status.HTTP_201_CREATED
    comments = response.json()["comments"]
    assert len(comments) == 1
    assert comments[0]["text"] == "Great!"
    assert comments[0]["author_id"] == other_user.id
    assert comments[0]["author_name"] == other_user.name
    assert comments[0]["id"]


def test_comments_keep_insertion_order(client, test_post, auth_token, other_auth_token) -> None:
    _comment(client, test_post.id, auth_token, "one")
    _comment(client, test_post.id, other_auth_token, "two")
    data = _comment(client, test_post.id, auth_token, "three").json()
    assert [c["text"] for c in data["comments"]] == ["one", "two", "three"]


def test_add_comment_text_bounds(client, test_post, auth_token) -> None:
    assert _comment(client, test_post.id, auth_token, "").status_code == status.HTTP_400_BAD_REQUEST
    assert _comment(client, test_post.id, auth_token, "x" * 301).status_code == status.HTTP_400_BAD_REQUEST
    assert _comment(client, test_post.id, auth_token, "x" * 300).status_code == status.HTTP_201_CREATED


def test_add_comment_missing_post(client, auth_token) -> None:
    response = _comment(client, "missing", auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_add_comment_non_string_text(client, test_post, auth_token) -> None:
    url = f"/api/posts/{test_post.id}/comments"
    for text in (42, ["hi"], {"text": "hi"}):
        response = client.post(url, json={"text": text}, headers=auth_token)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Comment text must be a string"

    # The post is looked up before the payload is judged.
    missing = client.post("/api/posts/missing/comments", json={"text": 42}, headers=auth_token)
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_add_comment_requires_auth(client, test_post) -> None:
    response = client.post(f"/api/posts/{test_post.id}/comments", json={"text": "hi"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_comment_author_can_remove(client, test_post, other_auth_token) -> None:
    comment_id = _comment(client, test_post.id, other_auth_token).json()["comments"][0]["id"]

    response = client.delete(
        f"/api/posts/{test_post.id}/comments/{comment_id}", headers=other_auth_token
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["comments"] == []


def test_post_owner_can_remove_any_comment(client, test_post, auth_token, other_auth_token) -> None:
    comment_id = _comment(client, test_post.id, other_auth_token).json()["comments"][0]["id"]

    response = client.delete(f"/api/posts/{test_post.id}/comments/{comment_id}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["comments"] == []


def test_third_party_cannot_remove_comment(
    client, test_post, other_auth_token, third_auth_token
) -> None:
    comment_id = _comment(client, test_post.id, other_auth_token).json()["comments"][0]["id"]

    response = client.delete(
        f"/api/posts/{test_post.id}/comments/{comment_id}", headers=third_auth_token
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_remove_missing_comment(client, test_post, auth_token) -> None:
    response = client.delete(f"/api/posts/{test_post.id}/comments/missing", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Comment not found"


def test_remove_comment_missing_post(client, auth_token) -> None:
    response = client.delete("/api/posts/missing/comments/whatever", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Post not found"
