"""
CLI for computing attention maps.
"""

import argparse
import glob
import os
import json
import logging
from pathlib import Path
from attentionmap.core import StentifordModel
from attentionmap.colorspaces import CONVERTER_REGISTRY
from attentionmap.utils import load_image, save_visualization, save_heatmap, validate_path

logger = logging.getLogger(__name__)

# Supported image extensions
IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.bmp', '.tiff', '.tif', '.webp'}

# CLI flags that override config values
OVERRIDE_ARGS = ('neighbourhood_size', 'max_checks', 'max_dist', 'color_space')


def find_images(path_or_pattern):
    """
    Find image files from a path, directory, or glob pattern.
    Returns list of image file paths.
    """
    images = []

    if '*' in path_or_pattern or '?' in path_or_pattern:
        for match in glob.glob(path_or_pattern, recursive=True):
            if Path(match).suffix.lower() in IMAGE_EXTENSIONS:
                images.append(match)
    elif os.path.isdir(path_or_pattern):
        for root, _, files in os.walk(path_or_pattern):
            for f in files:
                if Path(f).suffix.lower() in IMAGE_EXTENSIONS:
                    images.append(os.path.join(root, f))
    elif os.path.isfile(path_or_pattern):
        images.append(path_or_pattern)
    else:
        raise FileNotFoundError(f"Path not found: {path_or_pattern}")

    return sorted(images)


def build_model(args):
    """Model from the config file, with any CLI flags applied on top."""
    base = StentifordModel.from_config(args.config)
    params = base.get_config()
    for name in OVERRIDE_ARGS:
        value = getattr(args, name, None)
        if value is not None:
            params[name] = value

    rng = args.seed if args.seed is not None else base.rng
    return StentifordModel(rng=rng, **params)


def analyze_single_image(img_path, model, args, outdir):
    """
    Compute and save the attention map of one image.
    Returns dict with results or error info.
    """
    result = {
        'file': img_path,
        'filename': os.path.basename(img_path),
        'status': 'success'
    }

    try:
        img = load_image(img_path)
        result['image_shape'] = list(img.shape)

        attention = model.extract(img, show_progress=args.progress)

        vis_path = os.path.join(outdir, 'attention_visualization.png')
        save_visualization(model.get_attention_visualization(), vis_path)

        if not args.no_overlay:
            overlay_path = os.path.join(outdir, 'attention_overlay.png')
            save_heatmap(attention, img, overlay_path, max_checks=model.max_checks)

        result['max_attention'] = int(attention.max())
        result['mean_attention'] = float(attention.mean())
        result['min_attention'] = int(attention.min())
        result['attention_shape'] = list(attention.shape)
        result['parameters'] = model.get_config()

        summary_path = os.path.join(outdir, 'summary.json')
        with open(summary_path, 'w') as f:
            json.dump(result, f, indent=2)

    except Exception as e:
        result['status'] = 'error'
        result['error'] = str(e)
        logger.error(f"Failed to analyze {img_path}: {e}")

    return result


def build_parser():
    """Set up argparse with all the CLI options."""
    from attentionmap import __version__

    p = argparse.ArgumentParser(
        prog='attentionmap',
        description='attentionmap - Visual attention maps through competitive novelty'
    )
    p.add_argument(
        '--version', '-v',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    sub = p.add_subparsers(dest='cmd', help='Available commands')

    run = sub.add_parser('analyze', help='Compute attention map(s) for image(s)')

    input_group = run.add_mutually_exclusive_group(required=True)
    input_group.add_argument(
        '--input', '-i',
        help='Path to input image file or glob pattern (e.g., "photos/*.jpg")'
    )
    input_group.add_argument(
        '--input-dir', '-d',
        help='Directory containing images to analyze (recursive)'
    )

    run.add_argument(
        '--outdir', '-o',
        default='outputs',
        help='Output directory for results (default: outputs)'
    )
    run.add_argument(
        '--config',
        default='config/attention.json',
        help='Path to model configuration file (default: config/attention.json)'
    )
    run.add_argument(
        '--neighbourhood-size',
        type=int,
        dest='neighbourhood_size',
        help='Pixels compared per neighbourhood (overrides config)'
    )
    run.add_argument(
        '--max-checks',
        type=int,
        dest='max_checks',
        help='Random comparisons per pixel (overrides config)'
    )
    run.add_argument(
        '--max-dist',
        type=int,
        dest='max_dist',
        help='Largest colour distance still deemed similar (overrides config)'
    )
    run.add_argument(
        '--color-space',
        dest='color_space',
        choices=sorted(CONVERTER_REGISTRY.keys()),
        help='Colour space for comparisons (overrides config)'
    )
    run.add_argument(
        '--seed',
        type=int,
        help='Random seed for repeatable maps'
    )
    run.add_argument(
        '--no-overlay',
        action='store_true',
        help='Skip the heatmap overlay, only save the grayscale visualization'
    )
    run.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar while scanning'
    )
    run.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)'
    )

    return p


def main(argv=None):
    """Main entry point. Pass argv for testing, otherwise uses sys.argv."""
    p = build_parser()
    args = p.parse_args(argv)

    if args.cmd == 'analyze' and hasattr(args, 'log_level'):
        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            force=True
        )
    else:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    if args.cmd == 'analyze':
        try:
            input_path = args.input if args.input else args.input_dir

            images = find_images(input_path)

            if not images:
                logger.error(f"No images found in: {input_path}")
                return 1

            is_batch = len(images) > 1

            if is_batch:
                logger.info(f"Found {len(images)} images to analyze")
            else:
                logger.info(f"Analyzing image: {images[0]}")

            # One model for all images, the random stream continues across them
            model = build_model(args)
            logger.info(f"Model parameters: {model.get_config()}")

            outdir = validate_path(args.outdir)
            os.makedirs(outdir, exist_ok=True)

            results = []
            success_count = 0
            error_count = 0

            for idx, img_path in enumerate(images, 1):
                if is_batch:
                    logger.info(f"[{idx}/{len(images)}] Processing: {img_path}")
                    img_outdir = os.path.join(outdir, Path(img_path).stem)
                else:
                    img_outdir = str(outdir)

                os.makedirs(img_outdir, exist_ok=True)

                result = analyze_single_image(img_path, model, args, img_outdir)
                results.append(result)

                if result['status'] == 'success':
                    success_count += 1
                    logger.info(f"  Mean attention: {result['mean_attention']:.2f}")
                else:
                    error_count += 1

            if is_batch:
                batch_summary = {
                    'total_images': len(images),
                    'successful': success_count,
                    'failed': error_count,
                    'parameters': model.get_config(),
                    'results': results
                }

                batch_summary['results_by_attention'] = sorted(
                    [r for r in results if r['status'] == 'success'],
                    key=lambda x: x['mean_attention'],
                    reverse=True
                )

                batch_summary_path = os.path.join(outdir, 'batch_summary.json')
                with open(batch_summary_path, 'w') as f:
                    json.dump(batch_summary, f, indent=2)

                logger.info(f"Batch complete: {success_count} succeeded, {error_count} failed")
                logger.info(f"Batch summary: {batch_summary_path}")
            else:
                logger.info(f"Analysis complete. Outputs in {outdir}")

            return 0 if error_count == 0 else 1

        except FileNotFoundError as e:
            logger.error(f"File not found: {e}")
            return 1
        except ValueError as e:
            logger.error(f"Invalid parameters: {e}")
            return 1
    else:
        p.print_help()

    return 0


if __name__ == '__main__':
    main()
