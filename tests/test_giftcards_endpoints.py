from __future__ import annotations

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct
from web3 import Web3

from giftcards_api.domain.giftcards.messages import get_gift_card_order_id, get_message_to_sign

from reloadly_fakes import make_product, make_transaction

PERMIT_SIGNATURE = "0x" + "ef" * 65


@pytest.mark.asyncio
async def test_get_best_card_returns_fallback_mastercard(api_client, fake_reloadly) -> None:
    fake_reloadly.products_by_id[18597] = make_product(18597, minimum=5, maximum=500)

    response = await api_client.get("/get-best-card", params={"country": "us", "amount": "50"})

    assert response.status_code == 200
    body = response.json()
    assert body["productId"] == 18597
    assert body["global"] is False
    assert body["denominationType"] == "RANGE"


@pytest.mark.asyncio
async def test_get_best_card_is_served_under_api_prefix(api_client, fake_reloadly) -> None:
    fake_reloadly.products_by_id[18597] = make_product(18597)

    response = await api_client.get("/api/v1/get-best-card", params={"country": "US", "amount": "50"})

    assert response.status_code == 200
    assert response.json()["productId"] == 18597


@pytest.mark.asyncio
async def test_get_best_card_without_available_card(api_client, fake_reloadly) -> None:
    response = await api_client.get("/get-best-card", params={"country": "FR", "amount": "50"})

    assert response.status_code == 404
    assert response.json() == {"message": "There are no gift cards available."}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"country": "USA", "amount": "50"},
        {"country": "US", "amount": "5.5"},
        {"country": "US"},
        {},
    ],
)
async def test_get_best_card_rejects_malformed_parameters(api_client, fake_reloadly, params) -> None:
    response = await api_client.get("/get-best-card", params=params)

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid parameters"
    assert fake_reloadly.requests == []


@pytest.mark.asyncio
async def test_get_best_card_rejects_disallowed_country_without_network(api_client, fake_reloadly) -> None:
    response = await api_client.get("/get-best-card", params={"country": "KP", "amount": "50"})

    assert response.status_code == 400
    assert "KP" in response.json()["message"]
    assert fake_reloadly.requests == []


@pytest.mark.asyncio
async def test_get_best_card_hides_auth_failure(api_client, fake_reloadly) -> None:
    fake_reloadly.auth_status = 401

    response = await api_client.get("/get-best-card", params={"country": "US", "amount": "50"})

    assert response.status_code == 500
    assert response.json() == {"message": "There was an error while processing your request."}


@pytest.mark.asyncio
async def test_get_best_card_malformed_marketplace_listing_is_a_server_error(api_client, fake_reloadly) -> None:
    broken = make_product(18597)
    del broken["productId"]
    fake_reloadly.country_products[("mastercard", "US")] = [broken]

    response = await api_client.get("/get-best-card", params={"country": "US", "amount": "50"})

    assert response.status_code == 500
    assert response.json() == {"message": "There was an error while processing your request."}


@pytest.mark.asyncio
async def test_missing_credentials_is_a_server_error(api_client, settings, fake_reloadly) -> None:
    settings.reloadly_api_client_secret = ""

    response = await api_client.get("/get-best-card", params={"country": "US", "amount": "50"})

    assert response.status_code == 500
    assert fake_reloadly.requests == []


@pytest.mark.asyncio
async def test_get_order_returns_transaction_and_product(api_client, fake_reloadly) -> None:
    fake_reloadly.transactions.append(make_transaction(8001, custom_identifier="ORD-1", product_id=18597))
    fake_reloadly.products_by_id[18597] = make_product(18597)

    response = await api_client.get("/get-order", params={"orderId": "ORD-1"})

    assert response.status_code == 200
    body = response.json()
    assert body["transaction"]["transactionId"] == 8001
    assert body["transaction"]["customIdentifier"] == "ORD-1"
    assert body["product"]["productId"] == 18597


@pytest.mark.asyncio
async def test_get_order_with_failed_enrichment_returns_null_product(api_client, fake_reloadly) -> None:
    fake_reloadly.transactions.append(make_transaction(8002, custom_identifier="ORD-2", product_id=18597))
    fake_reloadly.product_status[18597] = 503

    response = await api_client.get("/get-order", params={"orderId": "ORD-2"})

    assert response.status_code == 200
    assert response.json()["product"] is None


@pytest.mark.asyncio
async def test_get_order_unknown_order(api_client) -> None:
    response = await api_client.get("/get-order", params={"orderId": "ORD-MISSING"})

    assert response.status_code == 404
    assert response.json() == "Order not found."


@pytest.mark.asyncio
async def test_get_order_pending_transaction(api_client, fake_reloadly) -> None:
    fake_reloadly.transactions.append(make_transaction(8003, custom_identifier="ORD123", status="PENDING"))

    response = await api_client.get("/get-order", params={"orderId": "ORD123"})

    assert response.status_code == 404
    assert response.json() == {"message": "There is no successful transaction for given order ID."}


@pytest.mark.asyncio
async def test_get_order_requires_order_id(api_client) -> None:
    response = await api_client.get("/get-order")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_order_malformed_marketplace_transaction_is_a_server_error(api_client, fake_reloadly) -> None:
    broken = make_transaction(8004, custom_identifier="ORD-BROKEN")
    del broken["transactionId"]
    fake_reloadly.transactions.append(broken)

    response = await api_client.get("/get-order", params={"orderId": "ORD-BROKEN"})

    assert response.status_code == 500
    assert response.json() == {"message": "There was an error while processing your request."}


def _redeem_params(account, transaction_id: int) -> dict[str, str]:
    message = get_message_to_sign(transaction_id, origin="pay.ubq.fi")
    signature = account.sign_message(encode_defunct(text=message)).signature
    return {
        "transactionId": str(transaction_id),
        "signedMessage": Web3.to_hex(signature),
        "wallet": account.address,
        "permitSig": PERMIT_SIGNATURE,
    }


@pytest.mark.asyncio
async def test_get_redeem_code_discloses_codes_to_signer(api_client, fake_reloadly) -> None:
    wallet = Account.create()
    order_id = get_gift_card_order_id(wallet.address, PERMIT_SIGNATURE)
    fake_reloadly.transactions.append(make_transaction(9001, custom_identifier=order_id))
    fake_reloadly.redeem_codes[9001] = [{"cardNumber": "6011-0000", "pinCode": "4321"}]

    response = await api_client.get("/get-redeem-code", params=_redeem_params(wallet, 9001))

    assert response.status_code == 200
    assert response.json() == [{"cardNumber": "6011-0000", "pinCode": "4321"}]


@pytest.mark.asyncio
async def test_get_redeem_code_refuses_other_wallet(api_client, fake_reloadly) -> None:
    wallet = Account.create()
    order_id = get_gift_card_order_id(wallet.address, PERMIT_SIGNATURE)
    fake_reloadly.transactions.append(make_transaction(9002, custom_identifier=order_id))
    fake_reloadly.redeem_codes[9002] = [{"cardNumber": "6011-0000", "pinCode": "4321"}]
    params = _redeem_params(Account.create(), 9002)
    params["wallet"] = wallet.address

    response = await api_client.get("/get-redeem-code", params=params)

    assert response.status_code == 403
    assert response.json() == {"message": "Redeem code can't be revealed to the connected wallet."}
    assert not any(path.endswith("/cards") for path in fake_reloadly.paths())


@pytest.mark.asyncio
async def test_get_redeem_code_rejects_malformed_wallet(api_client) -> None:
    params = _redeem_params(Account.create(), 9003)
    params["wallet"] = "not-a-wallet"

    response = await api_client.get("/get-redeem-code", params=params)

    assert response.status_code == 400
