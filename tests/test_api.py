import uuid

import jwt
import pytest

from app.core.config import settings


async def test_health(anon_client):
    response = await anon_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_deposit_and_balance(client):
    response = await client.post("/api/v1/wallet/deposit", json={"amount": 2500, "description": "Pocket money"})

    assert response.status_code == 201
    body = response.json()
    assert body["balance"] == 2500
    assert body["transaction"]["type"] == "deposit"

    balance = await client.get("/api/v1/wallet/balance")
    assert balance.status_code == 200
    assert balance.json()["balance"] == 2500


@pytest.mark.parametrize("key", ["userId", "user_id"])
async def test_user_id_in_body_is_rejected(client, key):
    response = await client.post("/api/v1/wallet/deposit", json={"amount": 100, key: str(uuid.uuid4())})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "USER_ID_NOT_ALLOWED"


async def test_missing_and_malformed_fields(client):
    missing = await client.post("/api/v1/wallet/deposit", json={"description": "no amount"})
    assert missing.status_code == 400
    assert missing.json()["detail"]["code"] == "MISSING_AMOUNT"

    malformed = await client.post("/api/v1/savings/lock", json={"amount": 100, "lockDays": "soon"})
    assert malformed.status_code == 400
    assert malformed.json()["detail"]["code"] == "INVALID_LOCK_DAYS"

    bad_id = await client.post("/api/v1/savings/withdraw", json={"savingsId": "not-a-uuid"})
    assert bad_id.json()["detail"]["code"] == "INVALID_SAVINGS_ID"


async def test_zero_deposit_is_invalid_amount(client):
    response = await client.post("/api/v1/wallet/deposit", json={"amount": 0})
    assert response.status_code == 400
    assert response.json()["detail"] == {
        "error": "Amount must be a positive number greater than 0",
        "code": "INVALID_AMOUNT",
    }


async def test_lock_without_funds(client):
    response = await client.post("/api/v1/savings/lock", json={"amount": 1000, "lock_days": 30})

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["code"] == "INSUFFICIENT_BALANCE"
    assert detail["available"] == 0
    assert detail["required"] == 1000
    assert detail["shortfall"] == 1000


async def test_lock_withdraw_and_views(client):
    await client.post("/api/v1/wallet/deposit", json={"amount": 1000})
    locked = await client.post("/api/v1/savings/lock", json={"amount": 1000, "lockDays": 30})
    assert locked.status_code == 201
    saving_id = locked.json()["id"]

    active = await client.get("/api/v1/savings/active")
    assert active.status_code == 200
    [item] = active.json()
    assert item["id"] == saving_id
    assert item["is_unlocked"] is False
    assert item["days_remaining"] == 30

    withdrawn = await client.post("/api/v1/savings/withdraw", json={"savingsId": saving_id})
    assert withdrawn.status_code == 200
    assert withdrawn.json()["penalty"] == 100
    assert withdrawn.json()["wallet_balance"] == 900

    again = await client.post("/api/v1/savings/withdraw", json={"savings_id": saving_id})
    assert again.status_code == 400
    assert again.json()["detail"]["code"] == "ALREADY_WITHDRAWN"

    history = await client.get("/api/v1/savings/history")
    body = history.json()
    assert body["summary"] == {"total_savings": 0, "total_withdrawn": 900, "total_penalties": 100}
    assert body["savings"][0]["final_amount"] == 900
    assert body["pagination"] == {"limit": 50, "offset": 0, "count": 1}

    assert (await client.get("/api/v1/savings/active")).json() == []


async def test_history_rejects_unknown_status(client):
    response = await client.get("/api/v1/savings/history", params={"status": "frozen"})
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "INVALID_STATUS"


async def test_withdraw_unknown_saving_is_404(client):
    response = await client.post("/api/v1/savings/withdraw", json={"savingsId": str(uuid.uuid4())})

    assert response.status_code == 404
    assert response.json()["detail"] == {"error": "Savings record not found", "code": "NOT_FOUND"}


async def test_goal_lifecycle(client, product_id):
    await client.post("/api/v1/wallet/deposit", json={"amount": 50_000})
    created = await client.post(
        "/api/v1/goals",
        json={"productId": str(product_id), "targetAmount": 40_000},
    )
    assert created.status_code == 201
    goal_id = created.json()["id"]
    assert created.json()["product"]["name"] == "Sony WH-1000XM5"

    contributed = await client.post(f"/api/v1/goals/{goal_id}/contribute", json={"amount": 10_000, "notes": "March"})
    assert contributed.status_code == 201
    assert contributed.json()["wallet_balance"] == 40_000
    assert contributed.json()["goal_completed"] is False

    not_ready = await client.post(f"/api/v1/goals/{goal_id}/complete")
    assert not_ready.status_code == 400
    assert not_ready.json()["detail"]["code"] == "GOAL_NOT_FULLY_FUNDED"
    assert not_ready.json()["detail"]["remaining"] == 30_000

    listing = await client.get("/api/v1/goals", params={"status": "active"})
    [goal] = listing.json()["goals"]
    assert goal["progress_percentage"] == 25
    assert goal["remaining_amount"] == 30_000

    detail = await client.get(f"/api/v1/goals/{goal_id}")
    assert detail.status_code == 200
    assert [c["notes"] for c in detail.json()["contributions"]] == ["March"]
    assert detail.json()["product"]["id"] == str(product_id)

    cancelled = await client.post(f"/api/v1/goals/{goal_id}/cancel")
    assert cancelled.status_code == 200
    assert cancelled.json()["refunded_amount"] == 10_000
    assert cancelled.json()["wallet_balance"] == 50_000


async def test_goal_detail_of_other_user_is_forbidden(client, db, ledger, other_user_id, product_id):
    theirs = await ledger.create_goal(other_user_id, product_id, 1000)

    response = await client.get(f"/api/v1/goals/{theirs.value.id}")

    assert response.status_code == 403
    assert response.json()["detail"]["code"] == "FORBIDDEN"


async def test_goal_detail_unknown(client):
    response = await client.get(f"/api/v1/goals/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "GOAL_NOT_FOUND"


async def test_transactions_listing(client):
    await client.post("/api/v1/wallet/deposit", json={"amount": 1000})
    await client.post("/api/v1/savings/lock", json={"amount": 400, "lockDays": 10})

    everything = await client.get("/api/v1/transactions", params={"limit": 500})
    assert everything.status_code == 200
    assert everything.json()["pagination"]["limit"] == 100
    assert sorted(t["amount"] for t in everything.json()["transactions"]) == [-400, 1000]

    locks = await client.get("/api/v1/transactions", params={"type": "lock"})
    [entry] = locks.json()["transactions"]
    assert entry["balance_after"] == 600

    single = await client.get(f"/api/v1/transactions/{entry['id']}")
    assert single.status_code == 200
    assert single.json()["type"] == "lock"


async def test_transactions_query_validation(client):
    bad_type = await client.get("/api/v1/transactions", params={"type": "refund"})
    assert bad_type.json()["detail"]["code"] == "INVALID_TYPE"

    bad_limit = await client.get("/api/v1/transactions", params={"limit": 0})
    assert bad_limit.json()["detail"]["code"] == "INVALID_LIMIT"

    bad_offset = await client.get("/api/v1/transactions", params={"offset": -1})
    assert bad_offset.json()["detail"]["code"] == "INVALID_OFFSET"


async def test_transaction_of_other_user_is_404(client, ledger, other_user_id):
    theirs = await ledger.deposit(other_user_id, 100)

    response = await client.get(f"/api/v1/transactions/{theirs.value.transaction.id}")

    assert response.status_code == 404


async def test_requests_without_token_are_unauthorized(anon_client):
    response = await anon_client.get("/api/v1/wallet/balance")

    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "UNAUTHORIZED"


async def test_bearer_token_identifies_user(anon_client, user_id):
    token = jwt.encode(
        {"sub": str(user_id), "aud": "fastapi-users:auth"},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )

    response = await anon_client.post(
        "/api/v1/wallet/deposit",
        json={"amount": 300},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 201
    assert response.json()["transaction"]["user_id"] == str(user_id)


async def test_token_with_wrong_audience_is_rejected(anon_client, user_id):
    token = jwt.encode({"sub": str(user_id), "aud": "someone-else"}, settings.SECRET_KEY, algorithm="HS256")

    response = await anon_client.get("/api/v1/wallet/balance", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_register_login_and_use_token(anon_client):
    registered = await anon_client.post(
        "/api/v1/auth/register",
        json={"email": "meera@example.com", "password": "correct-horse-battery", "full_name": "Meera"},
    )
    assert registered.status_code == 201

    login = await anon_client.post(
        "/api/v1/auth/jwt/login",
        data={"username": "meera@example.com", "password": "correct-horse-battery"},
    )
    assert login.status_code == 200
    token = login.json()["access_token"]

    balance = await anon_client.get("/api/v1/wallet/balance", headers={"Authorization": f"Bearer {token}"})
    assert balance.status_code == 200
    assert balance.json()["balance"] == 0
    assert balance.json()["user_id"] == registered.json()["id"]


async def test_profile_and_logout(anon_client, user_id):
    token = jwt.encode({"sub": str(user_id), "aud": "fastapi-users:auth"}, settings.SECRET_KEY, algorithm="HS256")

    me = await anon_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "asha@example.com"

    logout = await anon_client.post("/api/v1/auth/jwt/logout")
    assert logout.status_code == 200
