import os, sys, time
import sounddevice as sd
import soundfile as sf

sys.path.insert(0, os.path.abspath("."))

from sarthi.stt.whisper_stt import transcribe_wav
from sarthi.tts.mms_tts import synth_mms
from sarthi.intents import explain
from sarthi.lang import iso_for, coerce_locale
from sarthi.normalize import normalize

LOCALE=coerce_locale(sys.argv[1] if len(sys.argv)>1 else None)
IN_WAV="smoke_input.wav"
OUT_WAV="smoke_reply.wav"
FS=16000
DUR=5

print("🎙️  बोलकर पूछें: 'कितनी जमीन चाहिए?'" if LOCALE=="hi" else "🎙️  Ask aloud: 'How much land is needed?'")
audio=sd.rec(int(DUR*FS), samplerate=FS, channels=1, dtype="float32")
sd.wait()
sf.write(IN_WAV, audio, FS)
print("Saved:", IN_WAV)

t0=time.time()
text, conf = transcribe_wav(IN_WAV, iso_for(LOCALE))
print("STT:", text, conf, "t=", time.time()-t0)

result = explain(LOCALE, normalize(text))
print("Topic:", result.topic, result.branch or "")
print("Reply:", result.text)

t0=time.time()
audio_bytes, _mime = synth_mms(result.text, LOCALE)
with open(OUT_WAV,"wb") as fh:
    fh.write(audio_bytes)
print("Saved:", OUT_WAV, "t=", time.time()-t0)

data, fs = sf.read(OUT_WAV)
sd.play(data, fs)
sd.wait()
print("Done")
