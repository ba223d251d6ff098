#python wrapper for ffprobe

import os
import json
import shlex
import subprocess

#===============================
def getMediaInfo(mediafile):
	if not os.path.isfile(mediafile):
		raise RuntimeError(f"file not found: {mediafile}")
	cmd = "ffprobe -v error -show_streams -show_format -of json %s"%(shlex.quote(mediafile))
	try:
		proc = subprocess.Popen(cmd, shell=True,
			stderr=subprocess.PIPE, stdout=subprocess.PIPE)
	except ValueError as exc:
		if "fds_to_keep" in str(exc):
			proc = subprocess.Popen(cmd, shell=True,
				stderr=subprocess.PIPE, stdout=subprocess.PIPE, close_fds=False)
		else:
			raise
	stdout, stderr = proc.communicate()
	if proc.returncode != 0:
		message = stderr.decode("utf-8", errors="replace").strip()
		raise RuntimeError(f"ffprobe failed for {mediafile}: {message}")
	data = json.loads(stdout)
	return data

#===============================
def getDuration(mediafile):
	data = getMediaInfo(mediafile)
	duration = data.get('format', {}).get('duration')
	if duration is None:
		return None
	return float(duration)

#===============================
def getVideoDimensions(mediafile):
	data = getMediaInfo(mediafile)
	videotrack = None
	for stream in data.get('streams', []):
		if stream.get('codec_type') == 'video':
			videotrack = stream
			break
	if videotrack is None:
		return None
	width = int(videotrack['width'])
	height = int(videotrack['height'])
	return (width, height)
