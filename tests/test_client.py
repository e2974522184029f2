"""
Tests for the requests-based API client, with a mocked session.
"""

import json
from unittest.mock import MagicMock

import requests

from company_directory_client import CompanyDirectoryAPI


def make_response(status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode() if body is not None else b""
    response.url = "http://testserver"
    return response


def make_client(*responses):
    session = MagicMock(spec=requests.Session)
    session.request.side_effect = list(responses)
    return CompanyDirectoryAPI(base_url="http://testserver/", session=session), session


def test_list_workers_drops_unset_params():
    page = {"page_number": 1, "page_size": 10, "total_count": 0, "total_pages": 0, "items": []}
    api, session = make_client(make_response(200, page))

    data, error = api.list_workers(location_id=3)

    assert error is None
    assert data == page
    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["url"] == "http://testserver/api/v1/workers/"
    assert kwargs["params"] == {"page_number": 1, "location_id": 3}


def test_create_location():
    api, session = make_client(make_response(201, {"id": 1, "city": "Paris"}))
    data, error = api.create_location("Paris")
    assert (data, error) == ({"id": 1, "city": "Paris"}, None)
    assert session.request.call_args.kwargs["json"] == {"city": "Paris"}


def test_http_error_is_returned_not_raised():
    api, _ = make_client(make_response(409, {"detail": "An entity with the name 'Paris' already exists."}))
    data, error = api.create_location("Paris")
    assert data is None
    assert error == {
        "status_code": 409,
        "message": "An entity with the name 'Paris' already exists.",
    }


def test_network_error():
    api, session = make_client()
    session.request.side_effect = requests.ConnectionError("refused")
    data, error = api.get_location(1)
    assert data is None
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_update_and_delete_return_booleans():
    api, session = make_client(make_response(204), make_response(204))
    assert api.update_worker(5, {"email": "a@b.fr"}) == (True, None)
    assert session.request.call_args.kwargs["json"] == {"email": "a@b.fr", "id": 5}
    assert api.delete_worker(5) == (True, None)


def test_exists_quotes_the_name():
    api, session = make_client(make_response(200, {"exists": True}))
    assert api.location_exists("Saint Malo") == (True, None)
    assert session.request.call_args.kwargs["url"].endswith("/locations/exists/Saint%20Malo")


def test_transfer_payload():
    summary = {"total_workers": 2, "success_count": 2, "errors": []}
    api, session = make_client(make_response(200, summary))
    data, error = api.transfer_workers([1, 2], new_service_id=4, allow_partial_transfer=True)
    assert error is None
    assert session.request.call_args.kwargs["json"] == {
        "worker_ids": [1, 2],
        "new_location_id": None,
        "new_service_id": 4,
        "allow_partial_transfer": True,
    }
