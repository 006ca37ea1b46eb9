import unittest

import requests

from twitch_resolver.api import GQLTokenProvider, LegacyTokenProvider, MetadataAPI, UsherAPI, build_token_provider
from twitch_resolver.api.auth_api import LEGACY_TOKEN_URL
from twitch_resolver.api.usher_api import USHER_CHANNEL_URL
from twitch_resolver.errors import AuthorizationError, ChannelOfflineError, ManifestFetchError, MetadataError
from twitch_resolver.models import AuthToken, ChannelIdentity

from .fakes import SAMPLE_PLAYLIST, FakeHttpClient, FakeResponse, connection_error, token_response


class TestGQLTokenProvider(unittest.TestCase):
    def setUp(self):
        self.client = FakeHttpClient()
        self.provider = GQLTokenProvider(self.client)

    def test_returns_signature_and_value(self):
        self.client.queue("gql", token_response(signature="abc", value="tok"))
        token = self.provider.get_token(ChannelIdentity(name="SomeChannel"))
        self.assertEqual(token, AuthToken(signature="abc", token="tok"))

        call = self.client.calls[0]
        self.assertEqual(call["payload"]["variables"]["login"], "somechannel")
        self.assertIn("streamPlaybackAccessToken", call["payload"]["query"])
        self.assertEqual(call["headers"], {})

    def test_sends_oauth_credential(self):
        self.client.queue("gql", token_response())
        self.provider.get_token(ChannelIdentity(name="somechannel", auth="secret"))
        self.assertEqual(self.client.calls[0]["headers"], {"Authorization": "OAuth secret"})

    def test_non_success_status(self):
        self.client.queue("gql", FakeResponse(status_code=401, json_data={"error": "Unauthorized"}))
        with self.assertRaises(AuthorizationError) as ctx:
            self.provider.get_token(ChannelIdentity(name="somechannel"))
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertIn("unable to obtain authorization", str(ctx.exception))

    def test_gql_errors(self):
        self.client.queue("gql", FakeResponse(json_data={"errors": [{"message": "service error"}]}))
        with self.assertRaisesRegex(AuthorizationError, "service error"):
            self.provider.get_token(ChannelIdentity(name="somechannel"))

    def test_unknown_channel(self):
        self.client.queue("gql", FakeResponse(json_data={"data": {"streamPlaybackAccessToken": None}}))
        with self.assertRaises(AuthorizationError):
            self.provider.get_token(ChannelIdentity(name="nobody"))

    def test_transport_error_propagates(self):
        self.client.queue("gql", connection_error())
        with self.assertNoLogs(level="ERROR"), self.assertRaises(requests.ConnectionError):
            self.provider.get_token(ChannelIdentity(name="somechannel"))

    def test_non_json_body(self):
        self.client.queue("gql", FakeResponse(text="<html>maintenance</html>"))
        with self.assertRaises(AuthorizationError) as ctx:
            self.provider.get_token(ChannelIdentity(name="somechannel"))
        self.assertIn("malformed response", str(ctx.exception))
        self.assertEqual(ctx.exception.status_code, 200)


class TestLegacyTokenProvider(unittest.TestCase):
    def setUp(self):
        self.client = FakeHttpClient()
        self.provider = LegacyTokenProvider(self.client)
        self.url = LEGACY_TOKEN_URL.format(channel="somechannel")

    def test_returns_sig_and_token(self):
        self.client.queue(self.url, FakeResponse(json_data={"sig": "s", "token": "t"}))
        token = self.provider.get_token(ChannelIdentity(name="SomeChannel"))
        self.assertEqual(token, AuthToken(signature="s", token="t"))

    def test_non_json_body(self):
        self.client.queue(self.url, FakeResponse(text="not json"))
        with self.assertRaises(AuthorizationError):
            self.provider.get_token(ChannelIdentity(name="somechannel"))

    def test_non_success_status(self):
        self.client.queue(self.url, FakeResponse(status_code=410, text="Gone"))
        with self.assertRaises(AuthorizationError) as ctx:
            self.provider.get_token(ChannelIdentity(name="somechannel"))
        self.assertEqual(ctx.exception.status_code, 410)


class TestBuildTokenProvider(unittest.TestCase):
    def test_known_protocols(self):
        client = FakeHttpClient()
        self.assertIsInstance(build_token_provider("gql", client), GQLTokenProvider)
        self.assertIsInstance(build_token_provider("legacy", client), LegacyTokenProvider)

    def test_unknown_protocol(self):
        with self.assertRaises(ValueError):
            build_token_provider("carrier-pigeon", FakeHttpClient())


class TestUsherAPI(unittest.TestCase):
    def setUp(self):
        self.client = FakeHttpClient()
        self.usher = UsherAPI(self.client)
        self.url = USHER_CHANNEL_URL.format(channel="somechannel")
        self.token = AuthToken(signature="sig", token='{"channel":"somechannel"}')

    def test_returns_playlist_text(self):
        self.client.queue(self.url, FakeResponse(text=SAMPLE_PLAYLIST))
        text = self.usher.fetch_manifest(ChannelIdentity(name="somechannel"), self.token)
        self.assertEqual(text, SAMPLE_PLAYLIST)

        params = self.client.calls[0]["params"]
        self.assertEqual(params["sig"], "sig")
        self.assertEqual(params["token"], '{"channel":"somechannel"}')
        self.assertEqual(params["allow_source"], "true")
        self.assertEqual(params["allow_audio_only"], "true")
        self.assertEqual(params["supported_codecs"], "avc1")
        self.assertEqual(params["fast_bread"], "false")
        self.assertTrue(params["p"].isdigit())

    def test_low_latency_flag(self):
        self.client.queue(self.url, FakeResponse(text=SAMPLE_PLAYLIST))
        self.usher.fetch_manifest(ChannelIdentity(name="somechannel", low_latency=True), self.token)
        self.assertEqual(self.client.calls[0]["params"]["fast_bread"], "true")

    def test_not_found_means_offline(self):
        self.client.queue(self.url, FakeResponse(status_code=404, text="[]"))
        with self.assertRaises(ChannelOfflineError) as ctx:
            self.usher.fetch_manifest(ChannelIdentity(name="somechannel"), self.token)
        self.assertEqual(str(ctx.exception), "somechannel is offline")

    def test_transport_error_propagates(self):
        self.client.queue(self.url, connection_error())
        with self.assertNoLogs(level="ERROR"), self.assertRaises(requests.ConnectionError):
            self.usher.fetch_manifest(ChannelIdentity(name="somechannel"), self.token)

    def test_other_status_is_fetch_error(self):
        self.client.queue(self.url, FakeResponse(status_code=403, text="token expired"))
        with self.assertRaises(ManifestFetchError) as ctx:
            self.usher.fetch_manifest(ChannelIdentity(name="somechannel"), self.token)
        self.assertNotIsInstance(ctx.exception, ChannelOfflineError)
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(ctx.exception.detail, "token expired")

    def test_build_url_escapes_token(self):
        url = self.usher.build_url(ChannelIdentity(name="somechannel"), self.token)
        self.assertTrue(url.startswith(self.url + "?"))
        self.assertIn("token=%7B%22channel%22%3A%22somechannel%22%7D", url)


class TestMetadataAPI(unittest.TestCase):
    def setUp(self):
        self.client = FakeHttpClient()
        self.api = MetadataAPI(self.client)

    def test_live_channel(self):
        self.client.queue(
            "gql",
            FakeResponse(json_data={"data": {"user": {"stream": {"title": "Speedruns", "game": {"name": "Celeste"}}}}}),
        )
        meta = self.api.get_stream_meta(ChannelIdentity(name="somechannel"))
        self.assertEqual(meta.title, "Speedruns")
        self.assertEqual(meta.game, "Celeste")
        self.assertEqual(self.client.calls[0]["payload"]["variables"], {"login": "somechannel"})

    def test_offline_channel_gets_placeholders(self):
        self.client.queue("gql", FakeResponse(json_data={"data": {"user": {"stream": None}}}))
        meta = self.api.get_stream_meta(ChannelIdentity(name="somechannel"))
        self.assertEqual(meta.title, "Unknown stream title")
        self.assertEqual(meta.game, "Unknown stream game")

    def test_non_success_status(self):
        self.client.queue("gql", FakeResponse(status_code=500, text="oops"))
        with self.assertRaises(MetadataError):
            self.api.get_stream_meta(ChannelIdentity(name="somechannel"))


if __name__ == "__main__":
    unittest.main()
