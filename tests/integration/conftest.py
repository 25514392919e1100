"""Fixtures specific to integration tests."""

import pytest
from unittest.mock import Mock


@pytest.fixture(autouse=True)
def _mark_as_integration(request):
    """Automatically mark all tests in integration/ as integration tests."""
    request.node.add_marker(pytest.mark.integration)


@pytest.fixture
def mock_manager():
    """Factory for mock digitalocean.Manager objects serving listing pages.

    Example:
        manager = mock_manager(pages=[[droplet_dict], [droplet_dict]])
    """

    def _create_mock(pages=None, token="test-token"):
        pages = pages if pages is not None else [[]]
        mock = Mock()
        mock.token = token

        def _get_data(url, params=None):
            index = params["page"] - 1
            data = {"droplets": pages[index], "links": {}}
            if index + 1 < len(pages):
                data["links"] = {"pages": {"next": f"https://api/droplets?page={index + 2}"}}
            return data

        mock.get_data.side_effect = _get_data
        return mock

    return _create_mock


@pytest.fixture
def mock_sns_client():
    """Factory for creating mock SNS clients.

    Example:
        sns = mock_sns_client(
            publish_response={'MessageId': 'test-id'}
        )
    """

    def _create_mock(**kwargs):
        mock = Mock()
        mock.publish.return_value = kwargs.get(
            "publish_response", {"MessageId": "test-message-id"}
        )
        return mock

    return _create_mock
