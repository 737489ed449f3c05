"""Marker headers carried on messages between send and completion."""

# Set on a message whose producer span was opened by a client-side send
MESSAGE_SENT_FROM_CLIENT = "messageSent"

# Set on a message that was received and dispatched under a consumer span
MESSAGE_CONSUMED = "messageConsumed"
