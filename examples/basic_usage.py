"""
Basic usage example for attentionmap.

Builds a synthetic image with one odd patch on a flat background, computes
its attention map, and saves the visualization next to this script.
Pass an image path as first argument to use your own picture instead.
"""

import os
import sys
import numpy as np
from attentionmap import StentifordModel, load_image, save_visualization, save_heatmap


def synthetic_image(size=64):
    """Gray background, a few textured stripes, and one red square."""
    img = np.full((size, size, 3), 128, dtype=np.uint8)
    img[:, ::8] = (90, 90, 90)
    img[size // 2 - 3:size // 2 + 3, size // 2 - 3:size // 2 + 3] = (220, 30, 30)
    return img


def main():
    script_dir = os.path.dirname(os.path.abspath(__file__))

    # Step 1: Load or build the image
    if len(sys.argv) > 1:
        print(f"Loading {sys.argv[1]}...")
        img = load_image(sys.argv[1])
    else:
        print("No image given, using a synthetic one")
        img = synthetic_image()
    print(f"Image shape: {img.shape}")

    # Step 2: Create the model (fixed seed for a repeatable map)
    model = StentifordModel(neighbourhood_size=3, max_checks=100, max_dist=40, rng=7)

    # Step 3: Scan
    print("\nComputing attention map...")
    attention = model.extract(img, show_progress=True)
    print(f"Max attention:  {attention.max()}")
    print(f"Mean attention: {attention.mean():.2f}")

    # Step 4: Save outputs
    vis_path = os.path.join(script_dir, 'attention_visualization.png')
    save_visualization(model.get_attention_visualization(), vis_path)
    overlay_path = os.path.join(script_dir, 'attention_overlay.png')
    save_heatmap(attention, img, overlay_path, max_checks=model.max_checks)
    print(f"Done! Check {vis_path} and {overlay_path}")


if __name__ == '__main__':
    main()
