import unittest
from unittest.mock import MagicMock

import requests

from pitchside.config import Settings
from pitchside.services import ClockDisplayTicker, MatchController, ServiceFactory, SessionStore

from tests.helpers import FakeClock, make_response


class ServiceFactoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.http = requests.Session()
        self.http.request = MagicMock(return_value=make_response(200, []))
        self.settings = Settings(supabase_url="https://x.example.co", supabase_key="k",
                                 http_timeout=1.0, tick_interval=0.5)
        self.factory = ServiceFactory(self.settings, http_session=self.http)

    def test_controller_shares_one_remote_client(self) -> None:
        controller = self.factory.create_match_controller()

        self.assertIsInstance(controller, MatchController)
        self.assertIsInstance(controller.store, SessionStore)
        self.assertIs(controller.loader.remote, controller.sync_client.remote)
        self.assertIs(controller.loader.remote.session, self.http)
        self.assertEqual(controller.loader.remote.timeout, 1.0)

    def test_independent_stores(self) -> None:
        first = self.factory.create_match_controller(self.factory.create_session_store(FakeClock()))
        second = self.factory.create_match_controller()
        self.assertIsNot(first.store, second.store)

    def test_ticker_uses_configured_interval(self) -> None:
        ticker = self.factory.create_display_ticker(self.factory.create_session_store())
        self.assertIsInstance(ticker, ClockDisplayTicker)
        self.assertEqual(ticker.interval, 0.5)

    def test_listing_goes_through_configured_session(self) -> None:
        result = self.factory.create_match_controller().list_matches()

        self.assertTrue(result.success)
        self.assertEqual(result.data, [])
        url = self.http.request.call_args.args[1]
        self.assertEqual(url, "https://x.example.co/rest/v1/matches")


if __name__ == "__main__":
    unittest.main()
