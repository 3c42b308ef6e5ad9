from datetime import datetime, timezone

import pytest

from app.crud.reward import create_reward, get_rewards_for_user
from app.schemas.reward import RewardCreate


async def test_earn_reward(client, user_id):
    response = await client.post(
        "/api/v1/rewards",
        json={"rewardType": "badge", "rewardName": "  First Lock  ", "rewardDescription": " Locked savings once "},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == str(user_id)
    assert body["reward_type"] == "badge"
    assert body["reward_name"] == "First Lock"
    assert body["reward_description"] == "Locked savings once"
    assert body["earned_at"]


async def test_list_and_filter_rewards(client):
    for reward_type, name in [("badge", "Saver"), ("achievement", "Goal Reached"), ("badge", "Streak")]:
        response = await client.post("/api/v1/rewards", json={"reward_type": reward_type, "reward_name": name})
        assert response.status_code == 201

    everything = await client.get("/api/v1/rewards")
    assert everything.status_code == 200
    assert everything.json()["pagination"]["count"] == 3

    badges = await client.get("/api/v1/rewards", params={"rewardType": "badge"})
    assert badges.status_code == 200
    assert {r["reward_name"] for r in badges.json()["rewards"]} == {"Saver", "Streak"}

    page = await client.get("/api/v1/rewards", params={"limit": 1, "offset": 1})
    assert len(page.json()["rewards"]) == 1
    assert page.json()["pagination"] == {"limit": 1, "offset": 1, "count": 1}


async def test_list_rejects_unknown_reward_type(client):
    response = await client.get("/api/v1/rewards", params={"rewardType": "trophy"})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "INVALID_REWARD_TYPE"


@pytest.mark.parametrize(
    "payload, code",
    [
        ({"rewardName": "Saver"}, "MISSING_REWARD_TYPE"),
        ({"rewardType": "trophy", "rewardName": "Saver"}, "INVALID_REWARD_TYPE"),
        ({"rewardType": "badge"}, "MISSING_REWARD_NAME"),
        ({"rewardType": "badge", "rewardName": ""}, "MISSING_REWARD_NAME"),
        ({"rewardType": "badge", "rewardName": "   "}, "INVALID_REWARD_NAME"),
        ({"rewardType": "badge", "rewardName": 42}, "INVALID_REWARD_NAME"),
        ({"rewardType": "badge", "rewardName": "Saver", "userId": "someone"}, "USER_ID_NOT_ALLOWED"),
    ],
)
async def test_earn_reward_validation(client, payload, code):
    response = await client.post("/api/v1/rewards", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == code


async def test_rewards_of_other_users_are_not_listed(client, db, other_user_id):
    reward_in = RewardCreate(reward_type="product", reward_name="Headphones")
    await create_reward(other_user_id, reward_in, datetime(2025, 1, 1, tzinfo=timezone.utc), db)

    response = await client.get("/api/v1/rewards")

    assert response.status_code == 200
    assert response.json()["rewards"] == []


async def test_rewards_are_newest_first(db, user_id):
    for day, name in [(1, "Old"), (3, "Newest"), (2, "Middle")]:
        reward_in = RewardCreate(reward_type="achievement", reward_name=name)
        await create_reward(user_id, reward_in, datetime(2025, 1, day, tzinfo=timezone.utc), db)

    rewards = await get_rewards_for_user(user_id, db)

    assert [r.reward_name for r in rewards] == ["Newest", "Middle", "Old"]
