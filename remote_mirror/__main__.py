from .constants import MIRROR_NAME
from .main import main

main(prog_name=MIRROR_NAME)
