"""Chat platform integrations. Discord is the only one so far."""
