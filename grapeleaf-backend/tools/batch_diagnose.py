# tools/batch_diagnose.py
"""
Diagnosis massal satu folder citra daun -> CSV + ringkasan distribusi label.

Contoh:
  python tools/batch_diagnose.py -i samples/ -o hasil.csv
  python tools/batch_diagnose.py -i samples/ -o hasil.csv --recursive --scores
"""
import argparse
import csv
import logging
import sys
from collections import Counter
from pathlib import Path

from tqdm import tqdm

from grapeleaf.core.logging_setup import configure_logging
from grapeleaf.models.prediction import Condition, VALID_LABELS
from grapeleaf.services.diagnosis_service import diagnose_image_bytes

VALID_IMG_EXTS = (".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff", ".webp")

logger = logging.getLogger("grapeleaf.tools.batch_diagnose")


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Diagnosis massal citra daun anggur (heuristik, tanpa model)."
    )
    p.add_argument("--input", "-i", type=str, required=True,
                   help="Folder berisi citra daun.")
    p.add_argument("--output", "-o", type=str, required=True,
                   help="Path file CSV hasil.")
    p.add_argument("--recursive", "-r", action="store_true",
                   help="Ikut scan subfolder.")
    p.add_argument("--scores", action="store_true",
                   help="Tambahkan kolom skor tiap kondisi (kosong untuk non-daun/gagal).")
    p.add_argument("--log_level", type=str, default="WARNING",
                   help="Level logging selama batch (default: WARNING, biar progress bar bersih).")
    return p.parse_args(argv)


def list_images(dirpath: Path, recursive: bool = False):
    if not dirpath.exists():
        return []
    it = dirpath.rglob("*") if recursive else dirpath.iterdir()
    return sorted(f for f in it if f.is_file() and f.suffix.lower() in VALID_IMG_EXTS)


def label_distribution(labels):
    """Hitung per label, semua label valid selalu muncul (0 kalau tidak ada)."""
    counts = Counter(labels)
    return {label: int(counts.get(label, 0)) for label in VALID_LABELS}


def run_batch(images, out_csv: Path, with_scores: bool = False):
    header = ["file", "disease", "confidence"]
    if with_scores:
        header += [c.label for c in Condition]

    out_csv.parent.mkdir(parents=True, exist_ok=True)
    labels = []

    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(header)

        for path in tqdm(images, desc="Diagnosing", unit="img"):
            pred = diagnose_image_bytes(path.read_bytes())
            labels.append(pred.disease)

            row = [str(path), pred.disease, f"{pred.confidence:.4f}"]
            if with_scores:
                scores = pred.scores or {}
                row += [
                    f"{scores[c.label]:.4f}" if c.label in scores else ""
                    for c in Condition
                ]
            w.writerow(row)

    return label_distribution(labels)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    in_dir = Path(args.input)
    images = list_images(in_dir, recursive=args.recursive)
    if not images:
        print(f"[WARN] Tidak ada citra di {in_dir}", file=sys.stderr)
        return 1

    dist = run_batch(images, Path(args.output), with_scores=args.scores)

    print(f"\n[OK] {len(images)} citra -> {args.output}")
    for label, n in dist.items():
        print(f"  {label:<18} {n}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
