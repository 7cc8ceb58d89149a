import logging
import os
import yaml
from pathlib import Path
from pydantic import BaseModel, Field, field_validator

class Config(BaseModel):
    float_format: str = Field(default='.6g')
    show_units: bool = Field(default=True)

    @field_validator("float_format")
    @classmethod
    def check_float_format(cls, v: str) -> str:
        format(1.0, v)
        return v


def config_path() -> Path:
    return Path(os.environ.get('CONFIG_FILE', '~/.config/scan-options/config.yml')).expanduser()


def load_config() -> Config:
    config_file = config_path()
    data = {}
    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f) or {}
    except IOError:
        logging.info("can not read config, trying to create it ...")
        try:
            config_file.parent.mkdir(exist_ok=True, parents=True)
            config_file.write_text(yaml.safe_dump(Config().model_dump()))
        except Exception as e:
            logging.error(e)
    except Exception as err:
        logging.exception(err)
        logging.info("invalid config, using default values")

    try:
        return Config(**data)
    except Exception as err:
        logging.exception(err)
        logging.info("invalid config, using default values")
        return Config()
