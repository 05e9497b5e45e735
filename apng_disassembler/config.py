import os

import dotenv

dotenv.load_dotenv()


class Config:
    # Decode the default image into pixels with Pillow
    DECODE_COVER = os.environ.get("APNG_DECODE_COVER") != "false"

    # Copy unknown ancillary chunks (tEXt, gAMA, ...) into the open frame/cover PNG
    KEEP_ANCILLARY = os.environ.get("APNG_KEEP_ANCILLARY") == "true"

    LOG_LEVEL = os.environ.get("APNG_LOG_LEVEL", "WARNING")
