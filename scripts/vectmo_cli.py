#!/usr/bin/env python3
"""
Batch train / predict with a Vectmo model (non-interactive).

Usage:
    python scripts/vectmo_cli.py train --input corpus.txt --base data/vectmo
    python scripts/vectmo_cli.py predict --base data/vectmo --seed "hello w" --max-chars 40
"""

import argparse
import sys
from pathlib import Path

from vectmo.config import settings
from vectmo.services.errors import VectmoError
from vectmo.services.model import VectmoModel
from vectmo.utils.logger import log_error, log_info, log_warning, setup_logger

logger = setup_logger("vectmo.cli")


def cmd_train(args) -> int:
    path = Path(args.input)
    if not path.exists():
        log_error(f"Input file '{path}' does not exist")
        return 1

    text = path.read_text(encoding="utf-8", errors="ignore")
    model = VectmoModel(base_name=args.base, model_dir=args.model_dir)
    summary = model.train(text)
    log_info(
        f"Trained on {summary.characters} characters: "
        f"{summary.pairs} pairs, {summary.words} words -> {summary.table_path}"
    )
    return 0


def cmd_predict(args) -> int:
    model = VectmoModel(base_name=args.base, model_dir=args.model_dir)
    text = model.predict(args.seed, max_chars=args.max_chars)
    if not model.vocabulary:
        log_warning(f"No word list at {model.words_path}; printing unsnapped output")
    print(text)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Train or query a Vectmo model")
    parser.add_argument("--model-dir", default=settings.MODEL_DIR, help="Directory holding model files")
    sub = parser.add_subparsers(dest="command", required=True)

    p_train = sub.add_parser("train", help="Train from a text file")
    p_train.add_argument("--input", "-i", required=True, help="Training text file")
    p_train.add_argument("--base", "-b", default=settings.MODEL_BASE_NAME, help="Model base name")
    p_train.set_defaults(func=cmd_train)

    p_predict = sub.add_parser("predict", help="Continue a seed text")
    p_predict.add_argument("--base", "-b", default=settings.MODEL_BASE_NAME, help="Model base name")
    p_predict.add_argument("--seed", "-s", required=True, help="Seed text; its last character starts the chain")
    p_predict.add_argument("--max-chars", type=int, default=settings.DEFAULT_MAX_CHARS)
    p_predict.set_defaults(func=cmd_predict)

    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except VectmoError as e:
        log_error(f"[ERROR] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
