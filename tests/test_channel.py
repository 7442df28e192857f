from spherical.events import EventChannel


async def test_publish_delivers_in_subscription_order():
    channel = EventChannel()
    received = []
    channel.subscribe("t", lambda p: received.append(("first", p)))

    async def second(payload):
        received.append(("second", payload))

    channel.subscribe("t", second)
    assert await channel.publish("t", 1) == 2
    assert received == [("first", 1), ("second", 1)]


async def test_failing_handler_does_not_block_others():
    channel = EventChannel()
    received = []

    def broken(payload):
        raise RuntimeError("boom")

    channel.subscribe("t", broken)
    channel.subscribe("t", received.append)
    assert await channel.publish("t", "x") == 1
    assert received == ["x"]


async def test_unsubscribe_and_topics_are_isolated():
    channel = EventChannel()
    received = []
    sub = channel.subscribe("a", received.append)
    channel.subscribe("b", received.append)

    assert channel.unsubscribe(sub) is True
    assert channel.unsubscribe(sub) is False
    assert channel.subscriber_count("a") == 0
    assert await channel.publish("a", 1) == 0
    assert await channel.publish("b", 2) == 1
    assert received == [2]
