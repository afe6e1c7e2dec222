from termcolor import colored

###############################################################################
# Output prefixes
###############################################################################

CROSSMARK = '[' + colored("✗", "red") + ']'

def _message(prefix: str, raw_prefix: str, *args):
    msg = '\n'.join(str(arg) for arg in args)
    first = True
    for line in msg.split('\n'):
        if first: print(f"{prefix} {line}")
        else:     print(f"{' ' * len(raw_prefix)} {line}")
        first = False

# Use CROSSMARK for errors
def error(*msg): _message(CROSSMARK, '[✗]', *msg)
