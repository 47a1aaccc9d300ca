# === ./quickedit/config.py === #
import os
from dotenv import load_dotenv
from quickedit.registry import RunMode
from quickedit.utils import parse_id_list, parse_name_list

load_dotenv()

GUILD_IDS = parse_id_list(os.getenv("GUILD_IDS", ""))
GUILD_MODE = bool(GUILD_IDS)

DISCORD_BOT_TOKEN = os.getenv('DISCORD_BOT_TOKEN')
DISCORD_APPLICATION_ID = os.getenv('DISCORD_APPLICATION_ID')

# "async" returns from the interaction handler before the command finishes
RUN_MODE = RunMode.from_value(os.getenv('RUN_MODE', 'async'))

COMMAND_PACKAGES = parse_name_list(os.getenv('COMMAND_PACKAGES'), default=("quickedit.commands",))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'info')

# for `/about`
SUPPORT_INVITE_URL = os.getenv("SUPPORT_INVITE_URL")  # optional pre-made invite
