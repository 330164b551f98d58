"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = [
    "sign-up", "sign-in", "verify", "sign-out", "whoami",
    "upload", "list", "rename", "share", "delete", "usage",
    "search", "where", "clear", "exit", "help",
]

VIEWS = ["documents", "images", "media", "others"]

SORT_KEYS = ["$createdAt-desc", "$createdAt-asc", "name-asc", "name-desc", "size-asc", "size-desc"]

STYLE = Style.from_dict(
    {
        "prompt": "#2F80ED bold",
        "command": "#0088ff bold",
        "location": "#888888",
        "toolbar": "bg:#1f2933 #e4e7eb",
        "search-result": "#e4e7eb",
        "search-empty": "#f0b429 italic",
    }
)

SKY_BLUE = "\033[38;2;47;128;237m"
GREEN = "\033[32m"
RESET = "\033[0m"

LOGO = f"""{SKY_BLUE}
 ███████╗██╗  ██╗██╗   ██╗██████╗  ██████╗ ██╗  ██╗
 ██╔════╝██║ ██╔╝╚██╗ ██╔╝██╔══██╗██╔═══██╗╚██╗██╔╝
 ███████╗█████╔╝  ╚████╔╝ ██████╔╝██║   ██║ ╚███╔╝
 ╚════██║██╔═██╗   ╚██╔╝  ██╔══██╗██║   ██║ ██╔██╗
 ███████║██║  ██╗   ██║   ██████╔╝╚██████╔╝██╔╝ ██╗
 ╚══════╝╚═╝  ╚═╝   ╚═╝   ╚═════╝  ╚═════╝ ╚═╝  ╚═╝
{RESET}"""

WELCOME_TITLE = "SkyBox CLI - File storage"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "skybox"

SEARCH_PROMPT_TEXT = "search> "

HELP_TEXT = """Available commands:
  sign-up <full name> <email>          Create an account; a sign-in code is emailed
  sign-in <email>                      Request a sign-in code for an existing account
  verify <account_id> <code>           Exchange the emailed code for a session
  sign-out                             End the current session
  whoami                               Show the signed-in user
  upload <path>...                     Upload local files
  list [view] [--query text] [--sort key-dir] [--limit n]
                                       List files (views: documents, images, media, others)
  rename <file_id> <name>              Rename a file
  share <file_id> [email...]           Replace the list of users a file is shared with
  delete <file_id> [bucket_file_id]    Delete your file, or remove a file shared with you
  usage                                Show storage used per file type
  search                               Interactive search; Enter opens the first result
  where                                Show the current view
  clear                                Clear screen and redisplay welcome message
  help                                 Show this help
  exit                                 Exit REPL

Examples:
  sign-up "Ada Lovelace" ada@example.com
  verify 6650a1c2e3 482913
  upload ~/report.pdf ~/photo.png
  list images --sort name-asc
  list --query report
  share 6650b7f1aa bob@example.com carol@example.com
  delete 6650b7f1aa"""
