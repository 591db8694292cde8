"""
The prompt driven login used by cluster servers.

Servers ask for a callsign (sometimes a password) and then show their command prompt. The automaton
answers the prompts and recognizes the command prompt as the end of the login.
"""

USERNAME_PROMPTS = ("callsign:", "call:", "login:")
PASSWORD_PROMPTS = ("password:",)
# the command prompts of CW Skimmer, DX Spider, AR-Cluster 6 and CC Cluster
READY_PROMPTS = ("z cwskimmer >", "z dxspider >", "z arc6>", "ccc >")

LINE_END = "\r\n"


def normalize(text):
    return text.strip().lower()


class LoginAutomaton:
    """
    Decides how to answer the text received while logging in.

    The automaton holds only the credentials; the caller keeps the authenticated flag and passes it
    to step().
    """

    def __init__(self, username, password, username_prompts=USERNAME_PROMPTS, password_prompts=PASSWORD_PROMPTS,
                 ready_prompts=READY_PROMPTS):
        self.username = username
        self.password = password
        self.username_prompts = tuple(username_prompts)
        self.password_prompts = tuple(password_prompts)
        self.ready_prompts = tuple(ready_prompts)

    def step(self, authenticated, text):
        """
        Processes one text unit.
        :param authenticated: True when the login has already completed
        :param text: the received text
        :return: a tuple (reply, authenticated). reply is the text to send, or None.
        """
        text = normalize(text)
        if authenticated or not text:
            return None, authenticated
        if text.endswith(self.username_prompts):
            return self.username + LINE_END, False
        if text.endswith(self.password_prompts):
            return self.password + LINE_END, False
        if text.endswith(self.ready_prompts):
            return None, True
        return None, False
