import unittest

from hamcrest import assert_that, is_

from clusterix.protocol.login import LoginAutomaton, normalize


class NormalizeTest(unittest.TestCase):
    def test_trims_and_lowercases(self):
        assert_that(normalize("  Please enter your Call:\r\n"), is_("please enter your call:"))


class LoginAutomatonTest(unittest.TestCase):

    def setUp(self):
        self.sut = LoginAutomaton("n0call", "secret")

    def test_username_prompts(self):
        for prompt in ("Please enter your callsign:", "Your call: ", "login:", "LOGIN: \r\n"):
            assert_that(self.sut.step(False, prompt), is_(("n0call\r\n", False)))

    def test_password_prompt(self):
        assert_that(self.sut.step(False, "Password: "), is_(("secret\r\n", False)))

    def test_ready_prompts(self):
        for prompt in ("N0CALL de DL0ABC 30-Mar-2023 1944Z dxspider >",
                       "N0CALL de SKIMMER 2023-03-30 19:44Z CwSkimmer >",
                       "N0CALL de DL0ABC 30-Mar-2023 1944Z arc6>",
                       "N0CALL de DL0ABC CCC >\r\n"):
            assert_that(self.sut.step(False, prompt), is_((None, True)))

    def test_login_sequence(self):
        authenticated = False
        replies = []
        for text in ("Welcome to the cluster\r\nlogin:", "password:", "Hello N0CALL\r\nn0call de dl0abc ccc >"):
            reply, authenticated = self.sut.step(authenticated, text)
            replies.append(reply)
        assert_that(replies, is_(["n0call\r\n", "secret\r\n", None]))
        assert_that(authenticated, is_(True))

    def test_unknown_text_changes_nothing(self):
        assert_that(self.sut.step(False, "Welcome to the cluster"), is_((None, False)))
        assert_that(self.sut.step(False, "dx de rx7k: 7154.0 rk7r cq 1650z"), is_((None, False)))

    def test_prompt_must_be_at_the_end(self):
        assert_that(self.sut.step(False, "login: is required, go ahead"), is_((None, False)))

    def test_empty_text_is_ignored(self):
        assert_that(self.sut.step(False, ""), is_((None, False)))
        assert_that(self.sut.step(False, " \r\n "), is_((None, False)))
        assert_that(self.sut.step(True, "   "), is_((None, True)))

    def test_bypassed_when_authenticated(self):
        assert_that(self.sut.step(True, "login:"), is_((None, True)))
        assert_that(self.sut.step(True, "password:"), is_((None, True)))

    def test_custom_prompts(self):
        sut = LoginAutomaton("n0call", "", ready_prompts=("ready>",))
        assert_that(sut.step(False, "Ready>"), is_((None, True)))
        assert_that(sut.step(False, "ccc >"), is_((None, False)))
