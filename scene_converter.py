#!/usr/bin/env python3
"""
Scene Converter - Main Orchestrator Module
Coordinates loading, verification, material compaction and saving of scenes,
and previews animation paths.
"""

import traceback
from pathlib import Path

from core.animation_detector import AnimationDetector
from readers import create_reader, get_file_type
from exporters.json_exporter import JsonSceneExporter


PREVIEW_TARGETS = ('camera', 'light', 'mesh')


def _format_vec(vec):
    if vec is None:
        return "-"
    return f"({vec[0]:.4f}, {vec[1]:.4f}, {vec[2]:.4f})"


class SceneConverter:
    """Scene converter (orchestrator/facade)

    This class coordinates the conversion process:
    1. Read the scene ONCE (via readers module)
    2. Verify it and analyze its animation paths
    3. Optionally remove unused materials
    4. Write it (via exporters module)
    """

    def __init__(self, progress_callback=None):
        """Initialize converter

        Args:
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
        """
        self.progress_callback = progress_callback
        self.detector = AnimationDetector()

    def log(self, message):
        """Send progress updates to callback"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    def _load(self, input_file):
        file_type = get_file_type(str(input_file))
        self.log(f"Reading {input_file} ({file_type})...")
        reader = create_reader(input_file, self.progress_callback)
        return reader.load_scene()

    def convert(self, input_file, output_dir, scene_name=None, single_file=False,
                remove_unused_materials=False):
        """Load, verify and re-save a scene

        Args:
            input_file: Root JSON file of the input scene
            output_dir: Output directory
            scene_name: Base name of the output files (default: input file stem)
            single_file: Store all components inline in the root JSON file
            remove_unused_materials: Drop materials no mesh shape uses

        Returns:
            dict: Results with keys:
                - 'success': bool
                - 'export': exporter result (if the scene was written)
                - 'removed_materials': number of dropped materials
                - 'message': Summary message
        """
        try:
            scene_name = scene_name or Path(input_file).stem

            self.log(f"\n{'='*60}")
            self.log(f"Input: {input_file}")
            self.log(f"Output: {output_dir}")
            self.log(f"Scene: {scene_name}")
            self.log(f"{'='*60}\n")

            # Step 1: Read input file
            self.log("Step 1/4: Reading scene...")
            scene = self._load(input_file)

            # Step 2: Verify
            self.log("\nStep 2/4: Verifying scene...")
            scene.verify()
            categories = self.detector.analyze_scene(scene)
            self.log(self.detector.get_animation_summary(categories))

            # Step 3: Materials
            removed = 0
            if remove_unused_materials:
                self.log("\nStep 3/4: Removing unused materials...")
                before = len(scene.get_materials())
                scene.remove_unused_materials()
                removed = before - len(scene.get_materials())
                self.log(f"  Removed {removed} of {before} material(s)")
            else:
                self.log("\nStep 3/4: Keeping all materials")

            # Step 4: Write
            self.log("\nStep 4/4: Writing scene...")
            exporter = JsonSceneExporter(self.progress_callback)
            export_result = exporter.export(scene, output_dir, scene_name, single_file=single_file)
            if export_result['success']:
                self.log(exporter.get_export_summary(export_result))

            return {
                'success': export_result['success'],
                'export': export_result,
                'removed_materials': removed,
                'message': export_result['message'],
            }

        except Exception as e:
            self.log(f"\nERROR: {str(e)}")
            self.log(traceback.format_exc())
            return {
                'success': False,
                'message': f"Conversion failed: {str(e)}"
            }

    def verify(self, input_file):
        """Load and verify a scene without writing anything

        Returns:
            dict: Results with keys 'success', 'categories' (on success) and 'message'
        """
        try:
            scene = self._load(input_file)
            scene.verify()
            categories = self.detector.analyze_scene(scene)
            self.log(self.detector.get_animation_summary(categories))
            self.log("✓ Scene is valid")
            return {
                'success': True,
                'categories': categories,
                'message': "Scene is valid",
            }
        except Exception as e:
            self.log(f"✗ Verification failed: {e}")
            return {
                'success': False,
                'message': f"Verification failed: {e}",
            }

    def preview_path(self, input_file, target='camera', index=0, fps=24, duration=None):
        """Sample an animation path of a scene entity

        Args:
            input_file: Root JSON file of the scene
            target: 'camera', 'light' or 'mesh'
            index: Light or mesh index (ignored for the camera)
            fps: Samples per second
            duration: Seconds to sample (default: one lap of the path)

        Returns:
            dict: Results with keys 'success', 'keyframes' (on success) and 'message'
        """
        try:
            if target not in PREVIEW_TARGETS:
                raise ValueError(f"Unknown preview target: {target}")

            scene = self._load(input_file)
            scene.verify()

            if target == 'camera':
                entity = scene.get_camera()
            elif target == 'light':
                entity = scene.get_lights()[index]
            else:
                entity = scene.get_meshes()[index]

            if duration is None:
                duration = max(
                    [sum(s.time for s in path.get_sections()) for path in entity.paths()],
                    default=0.0,
                )
            frame_count = max(1, int(round(duration * fps)) + 1)

            keyframes = self.detector.sample_entity(entity, fps, frame_count)
            for k in keyframes:
                self.log(
                    f"  {k.frame:5d}  t={k.time:8.3f}  section={k.section_index}"
                    f"  pos={_format_vec(k.position)}  look_at={_format_vec(k.look_at)}"
                )

            return {
                'success': True,
                'keyframes': keyframes,
                'message': f"Sampled {len(keyframes)} frame(s) of the {target} path",
            }
        except Exception as e:
            self.log(f"✗ Path preview failed: {e}")
            return {
                'success': False,
                'message': f"Path preview failed: {e}",
            }
