"""
plot_planet.py — Render the six face textures of a generated planet
=====================================================================

Builds a planet with the given seed and writes its six face textures
side by side to a PNG.

Usage:
    python plot_planet.py                              # random seed
    python plot_planet.py --seed 42 --noise perlin
    python plot_planet.py --seed 42 --texres 512 --octaves 7 --out planet.png
"""
import os
import sys
import argparse
import logging
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from cusp_planet.config import PlanetConfig, parse_seed
from cusp_planet.controller import SurfaceController
from cusp_planet.noise import as_noise_type
from cusp_planet.texture import to_rgb24


FACE_LABELS = [
    "Face 0 (z = 0)",
    "Face 1 (x = 0)",
    "Face 2 (y = 0)",
    "Face 3 (z = N)",
    "Face 4 (x = N)",
    "Face 5 (y = N)",
]


def main():
    parser = argparse.ArgumentParser(description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('--seed', type=parse_seed, default=None)
    parser.add_argument('--noise', default='value', help="value or perlin")
    parser.add_argument('--resolution', type=int, default=64)
    parser.add_argument('--texres', type=int, default=256)
    parser.add_argument('--octaves', type=int, default=5)
    parser.add_argument('--out', default='planet_faces.png')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    config = PlanetConfig(resolution=args.resolution,
                          texture_resolution=args.texres,
                          seed=args.seed,
                          noise_type=as_noise_type(args.noise),
                          octaves=args.octaves)
    planet = SurfaceController(config)
    images = np.asarray(to_rgb24(planet.textures))

    fig, axes = plt.subplots(2, 3, figsize=(12, 8))
    for face_id, ax in enumerate(axes.flat):
        # row 0 of the texture is texel y = 0, shown at the bottom
        ax.imshow(images[face_id], origin='lower', interpolation='nearest')
        ax.set_title(FACE_LABELS[face_id])
        ax.set_xticks([])
        ax.set_yticks([])
    fig.suptitle(f"seed = {planet.seed}, noise = {config.noise_type.value}")
    fig.tight_layout()
    fig.savefig(args.out, dpi=100)
    print(f"Saved {args.out}")


if __name__ == "__main__":
    main()
