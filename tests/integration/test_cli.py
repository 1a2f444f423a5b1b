"""
Integration Tests for the payments CLI
"""

from unittest.mock import patch

import requests

from tests.helpers import mock_http_response


class TestPaymentsCli:

    def test_initiate(self, cli_runner):
        with patch('requests.Session.post') as mock_post:
            mock_post.return_value = mock_http_response({'data': {'checkout_id': 'abc123XY'}})

            result = cli_runner.invoke(args=['payments', 'initiate', '--phone', '0712345678'])

        assert result.exit_code == 0
        assert 'abc123XY' in result.output
        assert mock_post.call_args.kwargs['json']['amount'] == 129

    def test_initiate_invalid_phone(self, cli_runner):
        with patch('requests.Session.post') as mock_post:
            result = cli_runner.invoke(args=['payments', 'initiate', '--phone', '12345'])

        assert result.exit_code != 0
        assert 'Invalid phone number format' in result.output
        mock_post.assert_not_called()

    def test_initiate_and_wait(self, cli_runner):
        with patch('requests.Session.post') as mock_post:
            mock_post.side_effect = [
                mock_http_response({'checkoutId': 'abc123XY'}),
                mock_http_response({'status': 'pending'}),
                mock_http_response({'status': 'completed'}),
            ]

            result = cli_runner.invoke(args=[
                'payments', 'initiate', '--phone', '0712345678', '--wait', '--interval', '0'
            ])

        assert result.exit_code == 0
        assert 'NYOTA-TRK-ABC123XY' in result.output

    def test_poll_paid(self, cli_runner):
        with patch('requests.Session.post') as mock_post:
            mock_post.return_value = mock_http_response({'status': 'paid'})

            result = cli_runner.invoke(args=['payments', 'poll', 'abc123XY'])

        assert result.exit_code == 0
        assert 'Tracking number: NYOTA-TRK-ABC123XY' in result.output

    def test_poll_failed(self, cli_runner):
        with patch('requests.Session.post') as mock_post:
            mock_post.return_value = mock_http_response({'status': 'cancelled'})

            result = cli_runner.invoke(args=['payments', 'poll', 'abc123XY'])

        assert result.exit_code == 1
        assert 'not completed' in result.output

    def test_poll_exhausted_is_pending(self, cli_runner):
        with patch('requests.Session.post', side_effect=requests.Timeout('read timed out')) as mock_post:
            result = cli_runner.invoke(args=['payments', 'poll', 'abc123XY', '--attempts', '2'])

        assert result.exit_code == 2
        assert 'still pending' in result.output
        assert 'flask payments poll abc123XY' in result.output
        assert mock_post.call_count == 2
