from .draft import Draft, Format, USER_AGENT, split_path
from .environment import Environment
from .encoded_body import EncodedBody
