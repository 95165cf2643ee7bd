"""
Tests for conversation storage, unseen counts and the seen flag.
"""

import unittest

from helpers import DatabaseTestCase

from quickchat.core import message as message_service
from quickchat.core import user as user_service
from quickchat.core.errors import ValidationError


class MessageTestCase(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        _, self.alice = user_service.signup(self.db, "Alice", "alice@x.com", "pw", "a")
        _, self.bob = user_service.signup(self.db, "Bob", "bob@x.com", "pw", "b")
        _, self.carol = user_service.signup(self.db, "Carol", "carol@x.com", "pw", "c")


class TestStoreMessage(MessageTestCase):

    def test_requires_text_or_image(self):
        with self.assertRaises(ValidationError):
            message_service.store_message(self.db, self.alice.id, self.bob.id)
        with self.assertRaises(ValidationError):
            message_service.store_message(self.db, self.alice.id, self.bob.id, text="", image="")

    def test_image_only_message(self):
        msg = message_service.store_message(
            self.db, self.alice.id, self.bob.id, image="https://cdn.test/i.png"
        )
        self.assertIsNone(msg.text)
        self.assertEqual(msg.image, "https://cdn.test/i.png")
        self.assertFalse(msg.seen)

    def test_unknown_receiver_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            message_service.store_message(self.db, self.alice.id, "nobody", text="hi")
        self.assertEqual(ctx.exception.message, "Receiver not found")


class TestConversation(MessageTestCase):

    def test_sent_messages_appear_once_in_order(self):
        m1 = message_service.store_message(self.db, self.alice.id, self.bob.id, text="one")
        m2 = message_service.store_message(self.db, self.bob.id, self.alice.id, text="two")
        m3 = message_service.store_message(self.db, self.alice.id, self.bob.id, text="three")
        # Unrelated conversation
        message_service.store_message(self.db, self.carol.id, self.alice.id, text="other")

        ids = [m.id for m in message_service.list_conversation(self.db, self.alice.id, self.bob.id)]
        self.assertEqual(ids, [m1.id, m2.id, m3.id])

    def test_listing_marks_peer_messages_seen(self):
        message_service.store_message(self.db, self.bob.id, self.alice.id, text="hi")
        message_service.store_message(self.db, self.bob.id, self.alice.id, text="there")
        mine = message_service.store_message(self.db, self.alice.id, self.bob.id, text="yo")

        _, unseen = message_service.list_peers(self.db, self.alice.id)
        self.assertEqual(unseen, {self.bob.id: 2})

        messages = message_service.list_conversation(self.db, self.alice.id, self.bob.id)
        self.assertTrue(all(m.seen for m in messages if m.sender_id == self.bob.id))

        _, unseen = message_service.list_peers(self.db, self.alice.id)
        self.assertEqual(unseen, {})

        # Alice's own message stays unseen until Bob opens the conversation
        self.db.refresh(mine)
        self.assertFalse(mine.seen)

    def test_fetch_conversation_is_read_only(self):
        message_service.store_message(self.db, self.bob.id, self.alice.id, text="hi")
        message_service.fetch_conversation(self.db, self.alice.id, self.bob.id)
        self.assertEqual(message_service.unseen_counts(self.db, self.alice.id), {self.bob.id: 1})

        changed = message_service.mark_conversation_seen(self.db, self.alice.id, self.bob.id)
        self.assertEqual(changed, 1)
        self.assertEqual(message_service.unseen_counts(self.db, self.alice.id), {})


class TestListPeers(MessageTestCase):

    def test_excludes_self_and_counts_per_peer(self):
        message_service.store_message(self.db, self.bob.id, self.alice.id, text="1")
        message_service.store_message(self.db, self.carol.id, self.alice.id, text="2")
        message_service.store_message(self.db, self.carol.id, self.alice.id, text="3")
        # Sent by Alice: never counted for Alice
        message_service.store_message(self.db, self.alice.id, self.bob.id, text="4")

        users, unseen = message_service.list_peers(self.db, self.alice.id)
        self.assertEqual({u.id for u in users}, {self.bob.id, self.carol.id})
        self.assertEqual(unseen, {self.bob.id: 1, self.carol.id: 2})


class TestMarkSeen(MessageTestCase):

    def test_mark_seen_is_idempotent(self):
        msg = message_service.store_message(self.db, self.bob.id, self.alice.id, text="hi")
        self.assertTrue(message_service.mark_seen(self.db, msg.id).seen)
        self.assertTrue(message_service.mark_seen(self.db, msg.id).seen)
        self.assertEqual(message_service.unseen_counts(self.db, self.alice.id), {})

    def test_unknown_message(self):
        with self.assertRaises(ValidationError):
            message_service.mark_seen(self.db, 9999)


if __name__ == "__main__":
    unittest.main()
