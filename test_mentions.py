import unittest

from geminibot.discord.mentions import MENTION_PATTERN, extract_prompt, is_addressed, strip_mentions
from geminibot.llm.prompt import LIMIT_CONDITION_PROMPT, build_prompt, strip_limit_condition

BOT_ID = 1234567890


class TestMessageFilter(unittest.TestCase):
    def test_skip_when_bot_not_mentioned(self):
        for content, mentions in (
            ("hello there", []),
            ("<@42> what do you think?", [42]),
            (f"talking about <@{BOT_ID}> without pinging", [42]),
        ):
            with self.subTest(content=content):
                self.assertIsNone(extract_prompt(content, mentions, BOT_ID))

    def test_mention_markup_removed(self):
        prompt = extract_prompt(f"<@{BOT_ID}> what is Python?", [BOT_ID], BOT_ID)
        self.assertEqual(prompt, " what is Python?")

    def test_all_mentions_removed_other_text_kept_in_order(self):
        content = f"a<@{BOT_ID}>b <@42>c<@7>"
        prompt = extract_prompt(content, [BOT_ID, 42, 7], BOT_ID)
        self.assertEqual(prompt, "ab c")
        self.assertIsNone(MENTION_PATTERN.search(prompt))

    def test_non_matching_markup_is_kept(self):
        # role mentions, empty ids and non-digit ids are not user mentions
        self.assertEqual(strip_mentions("<@&55> <@> <@abc>"), "<@&55> <@> <@abc>")

    def test_text_without_markup_unchanged(self):
        self.assertEqual(strip_mentions("plain text"), "plain text")

    def test_is_addressed(self):
        self.assertTrue(is_addressed([1, BOT_ID], BOT_ID))
        self.assertFalse(is_addressed([], BOT_ID))


class TestPrompt(unittest.TestCase):
    def test_suffix_appended(self):
        self.assertEqual(build_prompt("hi"), "hi" + LIMIT_CONDITION_PROMPT)

    def test_empty_text_is_not_rejected(self):
        self.assertEqual(build_prompt(""), LIMIT_CONDITION_PROMPT)

    def test_custom_suffix(self):
        self.assertEqual(build_prompt("hi", suffix=" (short)"), "hi (short)")

    def test_strip_limit_condition(self):
        self.assertEqual(strip_limit_condition(build_prompt("what is Python?")), "what is Python?")
        self.assertIsNone(strip_limit_condition("no suffix here"))


if __name__ == "__main__":
    unittest.main()
