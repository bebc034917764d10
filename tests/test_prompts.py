"""POST /prompts."""

import pytest

from conftest import AUTH_HEADERS, USER_ID, result


def test_save_prompts(client, mock_supabase):
    profiles = mock_supabase.table("profiles")
    stored = [{"question": "My simple pleasures", "answer": "Coffee"}]
    profiles.execute.return_value = result([{"userId": USER_ID, "prompts": stored}])

    response = client.post(
        "/prompts",
        headers=AUTH_HEADERS,
        json={"prompts": [
            {"question": " My simple pleasures ", "answer": "Coffee "},
            {"question": "", "answer": "dropped"},
            "not a prompt",
        ]},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "prompts": stored}
    profiles.upsert.assert_called_once_with(
        {"userId": USER_ID, "prompts": stored}, on_conflict="userId"
    )


def test_prompts_require_token(client, mock_supabase):
    response = client.post("/prompts", json={"prompts": [{"question": "Q", "answer": "A"}]})
    assert response.status_code == 401
    mock_supabase.table("profiles").upsert.assert_not_called()


@pytest.mark.parametrize("payload,error", [
    ({}, "Prompts must be an array"),
    ({"prompts": "Q"}, "Prompts must be an array"),
    ({"prompts": []}, "At least one prompt is required"),
    ({"prompts": [{"question": "Q", "answer": "  "}]}, "At least one prompt is required"),
    (
        {"prompts": [{"question": f"Q{i}", "answer": "A"} for i in range(4)]},
        "Maximum 3 prompts allowed",
    ),
    (
        {"prompts": [{"question": "Q", "answer": "A"}, {"question": "Q", "answer": "B"}]},
        "Each prompt question can only be used once",
    ),
])
def test_invalid_prompts(client, mock_supabase, payload, error):
    response = client.post("/prompts", headers=AUTH_HEADERS, json=payload)
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": error}
    mock_supabase.table("profiles").upsert.assert_not_called()


def test_store_failure_is_500(client, mock_supabase):
    mock_supabase.table("profiles").execute.side_effect = Exception("connection refused")
    response = client.post(
        "/prompts", headers=AUTH_HEADERS, json={"prompts": [{"question": "Q", "answer": "A"}]}
    )
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to save prompts"
